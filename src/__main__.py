#!/usr/bin/env python3
"""
slickcode - %%shortcode%% substitution for text files

Applies %%tag:attr1:attr2%% shortcodes to a text file and writes the
result, the same way a site's content, title or slug filters would.

As with other ChRIS-style apps, the CLI takes an input directory and an
output directory and runs a functional pipeline over a ProgramState.

Usage:
    slickcode inputdir/ outputdir/ --inputFile page.txt

Examples:
    # Content filtering with default settings
    slickcode . out/ --inputFile page.txt

    # Title filtering with host options from YAML
    slickcode . out/ --inputFile title.txt --context the_title --hostOptions site.yaml

    # Slug filtering, plus a highlighted view of the source shortcodes
    slickcode . out/ --inputFile title.txt --context sanitize_title --highlight -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import ShortcodeEngine, HandlerRegistry, tokens_find, __version__, LOG, state_connectToLogger
from .lib.host import hostOptions_load, HostOptionsError
from .lib.lexer import source_highlight
from .lib.slug import title_sanitize
from .models import ProgramState, pipeline, FilterContext, HostContext


parser = ArgumentParser(
    description="slickcode - apply %%shortcodes%% to a text file",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input text file (relative to inputdir)"
)

parser.add_argument(
    "--outputFile",
    default=None,
    type=str,
    help="Output file (relative to outputdir). Defaults to the input file name",
)

parser.add_argument(
    "--context",
    default=FilterContext.CONTENT.value,
    choices=[c.value for c in FilterContext],
    help="Filter context the text is processed under",
)

parser.add_argument(
    "--hostOptions",
    default=None,
    type=str,
    help="YAML file with host options (site_url, date_format, timezone, published, fields)",
)

parser.add_argument(
    "--highlight",
    action="store_true",
    help="Also write <outputFile>.html showing the source with shortcodes highlighted",
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
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - outputTargetFile: Resolved path to the output file
            - hostContext: HostContext from settings and host options
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing or host options cannot be loaded
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.hostOptions:
        options_file = Path(state.hostOptions)
        if not options_file.is_absolute():
            options_file = state.inputdir / options_file
        try:
            state.hostContext = hostOptions_load(options_file)
        except HostOptionsError as e:
            print(f"Error: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Host options: {options_file}", level=2)
    else:
        state.hostContext = HostContext.context_createFromSettings()

    state.outputTargetFile = state.outputdir / (state.outputFile or state.inputFile)
    state.outputTargetFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputTargetFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input text.

    Returns:
        ProgramState with added field:
            - sourceText: Raw file contents

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def shortcodes_apply(inputstate: ProgramState) -> ProgramState:
    """
    Substitute shortcodes in the source text under the chosen filter context.

    For the slug context the source is treated as the raw title and the
    sanitized title is derived from it, as a site's slug filter would.

    Returns:
        ProgramState with added fields:
            - transformedText: Substituted text
            - transformResult: Dict with tokens (found) and changed (bool)
    """
    state = inputstate.copy()

    LOG("Applying shortcodes...", level=1)
    engine = ShortcodeEngine(HandlerRegistry())
    context = FilterContext(state.context)
    source = state.sourceText or ""

    if context is FilterContext.SLUG:
        raw = source.strip()
        state.transformedText = engine.filter_apply(
            context, title_sanitize(raw), raw, host=state.hostContext
        )
    else:
        state.transformedText = engine.filter_apply(context, source, host=state.hostContext)

    state.transformResult = {
        'tokens': len(tokens_find(source)),
        'changed': state.transformedText != source,
    }
    LOG(f"Processed {state.transformResult['tokens']} shortcode tokens", level=2)
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the transformed text (and the highlighted view if requested).

    Exits:
        1 if nothing was transformed or writing fails
    """
    state = inputstate.copy()
    if state.transformedText is None or state.transformResult is None:
        print("Error: No transformed text available", file=sys.stderr)
        sys.exit(1)

    try:
        state.outputTargetFile.write_text(state.transformedText, encoding="utf-8")
        state.transformResult['output_file'] = str(state.outputTargetFile)

        if state.highlight:
            html_file = state.outputTargetFile.with_name(state.outputTargetFile.name + ".html")
            html_file.write_text(
                source_highlight(state.sourceText or "", title=state.inputFile), encoding="utf-8"
            )
            state.transformResult['highlight_file'] = str(html_file)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.outputTargetFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the run.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    if not state.transformResult:
        print("Error: Transformation failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Shortcodes applied", level=1)
    LOG(f"  Output: {state.transformResult['output_file']}", level=1)
    LOG(f"  Tokens: {state.transformResult['tokens']}", level=1)
    if 'highlight_file' in state.transformResult:
        LOG(f"  Highlighted source: {state.transformResult['highlight_file']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="slickcode - %%shortcode%% substitution",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - apply shortcodes to one input file.

    Pipeline:
        1. env_check: Validate paths, load host options
        2. source_read: Read the input text
        3. shortcodes_apply: Substitute shortcodes
        4. results_write: Write output (and highlighted view)
        5. results_report: Display results
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, shortcodes_apply, results_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
