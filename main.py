"""
Screenplay Scene Parser - CLI Interface

Parse screenplays (.txt, .fountain, .pdf, .fdx) into numbered scenes.

Usage:
    python main.py input.pdf [more inputs...] [--preview] [-o OUTPUT_DIR]
"""
import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from output_writer import split_to_markdown_files, write_json, write_summary
from parse_errors import ScreenplayParseError
from parser_config import ParserConfig, load_config
from screenplay_parser import parse_file


def build_config(args: argparse.Namespace) -> ParserConfig:
    """Config file values first, then any threshold flags given on the command line."""
    config = load_config(args.config) if args.config else ParserConfig()
    overrides = {}
    if args.min_scene_chars is not None:
        overrides["min_scene_content"] = args.min_scene_chars
    if args.space_ratio is not None:
        overrides["spaced_text_ratio"] = args.space_ratio
    if args.line_threshold is not None:
        overrides["line_break_threshold"] = args.line_threshold
    return dataclasses.replace(config, **overrides) if overrides else config


def print_preview(result) -> None:
    print("\nPreview - Scenes:")
    for scene in result.scenes[:20]:
        header_preview = scene.header[:55] + "..." if len(scene.header) > 55 else scene.header
        print(f"  {scene.number:>4}  {header_preview}")
    if len(result.scenes) > 20:
        print(f"  ... and {len(result.scenes) - 20} more scenes")


def main():
    parser = argparse.ArgumentParser(
        description="Parse screenplays into numbered scenes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py script.pdf                     # Parse with defaults
    python main.py script.fdx --preview           # List scenes without creating files
    python main.py a.pdf b.txt -o parsed/         # Several files, one output root
    python main.py script.pdf --min-scene-chars 20
        """
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Input screenplay files (.txt, .fountain, .pdf, .fdx)"
    )
    parser.add_argument(
        "-o", "--output-dir",
        help="Output directory (default: <input>_scenes/)"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show detected scenes without creating files"
    )
    parser.add_argument(
        "--config",
        help="JSON file with parser thresholds"
    )
    parser.add_argument(
        "--min-scene-chars",
        type=int,
        help="Minimum scene content length (default: 10)"
    )
    parser.add_argument(
        "--space-ratio",
        type=float,
        help="Whitespace ratio that marks letter-spaced text (default: 0.4)"
    )
    parser.add_argument(
        "--line-threshold",
        type=float,
        help="Vertical gap in PDF units that starts a new line (default: 5)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    # Validate input files
    input_paths = [Path(p) for p in args.inputs]
    for input_path in input_paths:
        if not input_path.exists():
            print(f"Error: File not found: {input_path}")
            sys.exit(1)

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: Could not load config: {e}")
        sys.exit(1)

    failures = 0
    for input_path in tqdm(input_paths, desc="Parsing", disable=len(input_paths) < 2 or not sys.stdout.isatty()):
        print(f"\nProcessing: {input_path.name}")

        try:
            result = parse_file(str(input_path), config=config)
        except ScreenplayParseError as e:
            print(f"Error: {e.message}")
            failures += 1
            continue

        # Show warnings
        if result.warnings and args.verbose:
            print("\nWarnings:")
            for w in result.warnings:
                print(f"  - {w.message}")

        # Summary
        print(f"\n{'='*50}")
        print(f"Title: {result.title}")
        print(f"Format: {result.metadata.format}")
        print(f"Scenes detected: {result.metadata.total_scenes}")
        print(f"Warnings: {len(result.warnings)}")
        print(f"{'='*50}")

        if args.preview:
            print_preview(result)
            continue

        if args.output_dir:
            output_dir = Path(args.output_dir)
            if len(input_paths) > 1:
                output_dir = output_dir / input_path.stem
        else:
            output_dir = input_path.parent / f"{input_path.stem}_scenes"

        json_path = write_json(result, str(output_dir), str(input_path))
        md_files = split_to_markdown_files(result, str(output_dir / "scenes"))
        summary_path = write_summary(result, str(output_dir), str(input_path))

        print(f"\nCreated {len(md_files)} scene files in: {output_dir / 'scenes'}")
        print(f"JSON:    {json_path}")
        print(f"Summary: {summary_path}")

    if args.preview and not failures:
        print("\nTo create files, run without --preview flag")

    if failures:
        sys.exit(1)
    print("\nDone!")


if __name__ == "__main__":
    main()
