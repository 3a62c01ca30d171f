#!/usr/bin/env python3
"""
regenerate - In-place static page regeneration

Regenerates one HTML/XML document: parses its comment directives, runs its
script blocks against page state, and writes the page back with the
directives intact and the data slots refreshed.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Pages carry their own generator: the source is the output
    - Round trip: a regenerated page is a valid input to the next run
    - Safety first: one backup is always kept, and unexpected changes
      can be refused

Usage:
    regenerate inputdir/ outputdir/ --inputFile index.html

Examples:
    # Regenerate into an output tree
    regenerate site/ build/ --inputFile about/index.html

    # Regenerate the source file itself
    regenerate site/ site/ --inputFile index.html --inPlace

    # Refuse the write if anything would change
    regenerate site/ build/ --inputFile index.html --checkNoChanges

    # Published output with all directives stripped, verbose
    regenerate site/ public/ --inputFile index.html --published -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import (
    Parser,
    PythonScriptExecutor,
    Renderer,
    RegenerateError,
    outputFile_write,
    __version__,
    LOG,
    state_connectToLogger,
)
from .config import appsettings
from .models import ProgramState, RegenerateResult, pipeline


DISPLAY_TITLE = r"""
                                        _
  _ __ ___  __ _  ___ _ __   ___ _ __ __ _| |_ ___
 | '__/ _ \/ _` |/ _ \ '_ \ / _ \ '__/ _` | __/ _ \
 | | |  __/ (_| |  __/ | | |  __/ | | (_| | ||  __/
 |_|  \___|\__, |\___|_| |_|\___|_|  \__,_|\__\___|
           |___/
  In-place static page regeneration
"""

# Define CLI arguments
parser = ArgumentParser(
    description="regenerate - refresh the data slots of an annotated HTML page",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Source document (relative to inputdir)"
)

parser.add_argument(
    "--inPlace",
    default=False,
    action="store_true",
    help="Regenerate the source document itself instead of writing into outputdir",
)

parser.add_argument(
    "--checkNoChanges",
    default=appsettings.check_no_changes,
    action="store_true",
    help="Fail, restoring the previous output, if regeneration changes it",
)

parser.add_argument(
    "--published",
    default=False,
    action="store_true",
    help="Strip directives, scripts and comment-only slots from the output",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve source and output paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source document
            - outputFile: Path that will be written
            - envOK: True if environment is valid

    Exits:
        1 if the source document is missing, or --published is combined
        with --inPlace (that would destroy the directives)
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.inPlace and state.published:
        print("Error: --published cannot be combined with --inPlace", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    state.outputFile = input_file if state.inPlace else state.outputdir / state.inputFile
    LOG(f"Input file: {state.inputSourceFile}", level=2)
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def page_parse(inputstate: ProgramState) -> ProgramState:
    """
    Read and parse the source document into components.

    Returns:
        ProgramState with added field:
            - document: Parsed Document

    Exits:
        1 if the file cannot be read or contains malformed directives
    """
    state = inputstate.copy()

    LOG(f"Parsing {state.inputSourceFile.name} ...", level=1)
    try:
        state.document = Parser.file_parse(state.inputSourceFile)
        LOG(f"Parsed {len(state.document.components)} components", level=2)
    except RegenerateError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def scripts_run(inputstate: ProgramState) -> ProgramState:
    """
    Execute the document's script blocks, in order, against its page state.

    Exits:
        1 if any script fails (nothing is written)
    """
    state = inputstate.copy()

    LOG(f"Executing {len(state.document.scripts)} script components ...", level=1)
    try:
        state.document.scripts_execute(PythonScriptExecutor())
    except RegenerateError as e:
        print(f"Script error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    return state


def page_write(inputstate: ProgramState) -> ProgramState:
    """
    Render the document and write it under the backup protocol.

    Returns:
        ProgramState with added field:
            - regenerateResult: RegenerateResult for the document

    Exits:
        1 on write failure or a detected change
    """
    state = inputstate.copy()
    document = state.document

    text = Renderer(document, showSource=not state.published).render()
    try:
        write = outputFile_write(state.outputFile, text, checkNoChanges=state.checkNoChanges)
    except RegenerateError as e:
        print(f"Write error: {e}", file=sys.stderr)
        sys.exit(1)

    state.regenerateResult = RegenerateResult(
        source=document.path,
        output=write.target,
        componentCount=len(document.components),
        scriptCount=len(document.scripts),
        write=write,
    )
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display regeneration results to the user.

    Exits:
        1 if regenerateResult is None
    """
    state: ProgramState = inputstate.copy()
    result = state.regenerateResult
    if not result:
        print("Error: Regeneration failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Regeneration successful!", level=1)
    LOG(f"  Output:     {result.output}", level=1)
    LOG(f"  Components: {result.componentCount}", level=1)
    LOG(f"  Scripts:    {result.scriptCount}", level=1)
    if result.write and result.write.backup:
        LOG(f"  Backup:     {result.write.backup}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="regenerate - In-place static page regeneration",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - regenerate one annotated page.

    Orchestrates the regeneration pipeline:
        1. env_check: Validate and resolve paths
        2. page_parse: Read and parse the document
        3. scripts_run: Execute script blocks against page state
        4. page_write: Render and write with backup protection
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, page_parse, scripts_run, page_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
