# src/fcom/cli.py
import sys
import argparse
from pathlib import Path
from typing import List

# Module imports
from fcom.config import DEFAULT_IGNORED_FOLDERS, DEFAULT_OUTPUTS, MODES, ConfigError
from fcom.core.combine import load_template_pair, render_combined
from fcom.core.ignore import PathFilter, load_ignore_spec, normalize_extensions, split_csv
from fcom.core.scanner import ProjectScanner, load_files
from fcom.core.tree import render_list, render_tree, root_label
from fcom.models import FileContext, FilterConfig, RenderContext, RenderOptions

EPILOG = """Example usage:
  fcom combine /path/to/folder -o output.txt -e rs,toml -i target -l -m markdown
  fcom tree /path/to/folder -o tree.txt
  fcom list /path/to/folder -o list.txt"""


def _add_common_arguments(subparser: argparse.ArgumentParser, command: str, use_gitignore: bool) -> None:
    subparser.add_argument("folder_path", type=str, help="Path to the folder to process")
    subparser.add_argument(
        "-o", "--output",
        type=str,
        default=DEFAULT_OUTPUTS[command],
        help=f"Name of the output file (default: {DEFAULT_OUTPUTS[command]})",
    )
    subparser.add_argument(
        "-e", "--extensions",
        type=str,
        default=None,
        help="File extensions to include (comma-separated, default: all)",
    )
    subparser.add_argument(
        "-i", "--ignore",
        type=str,
        default=None,
        help=f"Extra folder names to ignore (comma-separated, always ignored: {','.join(DEFAULT_IGNORED_FOLDERS)})",
    )
    subparser.add_argument(
        "--gitignore",
        action=argparse.BooleanOptionalAction,
        default=use_gitignore,
        help="Honour the root .gitignore",
    )


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="fcom",
        description="A tool for combining and analyzing files in a directory.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    combine = subparsers.add_parser(
        "combine",
        help="Combine files in a folder",
        description="Combine files in a folder, with options to filter by extension, ignore folders, "
                    "add line numbers, and choose the output format.",
    )
    _add_common_arguments(combine, "combine", use_gitignore=True)
    combine.add_argument("-l", "--add-line-numbers", action="store_true", help="Add line numbers to the output")
    combine.add_argument("-m", "--mode", type=str.lower, choices=MODES, default="xml", help="Output mode (default: xml)")
    combine.add_argument("--custom-output-template", type=str, default=None, help="Path to custom output template file")
    combine.add_argument("--custom-file-template", type=str, default=None, help="Path to custom file template file")

    tree = subparsers.add_parser("tree", help="Generate a folder tree")
    _add_common_arguments(tree, "tree", use_gitignore=False)

    listing = subparsers.add_parser("list", help="Generate a list of files")
    _add_common_arguments(listing, "list", use_gitignore=False)

    return parser


def build_filter(args, root_dir: Path, output_file: Path) -> PathFilter:
    """Merges CLI input with the static defaults into a fresh filter."""
    config = FilterConfig(
        allowed_extensions=normalize_extensions(split_csv(args.extensions)),
        ignored_folder_names=frozenset(DEFAULT_IGNORED_FOLDERS) | frozenset(split_csv(args.ignore)),
        excluded_paths=frozenset({output_file}),
    )
    ignore_spec = load_ignore_spec(root_dir) if args.gitignore else None
    return PathFilter(root_dir, config, ignore_spec)


def print_summary(files: List[FileContext]) -> None:
    ranked = sorted(files, key=lambda x: x.token_count, reverse=True)
    total_tokens = sum(f.token_count for f in ranked)

    print("\n--- Top 10 Largest Files (Est. Tokens) ---")
    print(f"{'Rank':<5} | {'Tokens':<10} | {'File Path'}")
    print("-" * 60)
    for i, f in enumerate(ranked[:10]):
        print(f"{i+1:<5} | {f.token_count:<10} | {f.rel_path}")
    print("-" * 60)
    print(f"Total files: {len(ranked)}")
    print(f"Total tokens: {total_tokens}")
    print("-" * 60)


def run_combine(args, root_dir: Path, scanner: ProjectScanner) -> str:
    templates = None
    if args.mode == "custom":
        templates = load_template_pair(
            Path(args.custom_output_template) if args.custom_output_template else None,
            Path(args.custom_file_template) if args.custom_file_template else None,
        )

    context = RenderContext(
        root_path=root_dir,
        entries=tuple(scanner.walk()),
        options=RenderOptions(add_line_numbers=args.add_line_numbers, mode=args.mode, templates=templates),
    )
    files = load_files(context.files)
    content = render_combined(context, files)

    if files:
        print_summary(files)
    else:
        print("No matching files found.")
    return content


def run_tree(args, root_dir: Path, scanner: ProjectScanner) -> str:
    return render_tree(scanner.walk(), root_label(root_dir))


def run_list(args, root_dir: Path, scanner: ProjectScanner) -> str:
    return render_list(scanner.walk())


COMMANDS = {
    "combine": run_combine,
    "tree": run_tree,
    "list": run_list,
}

SUCCESS_MESSAGES = {
    "combine": "All files have been processed and combined into '{output}' using {mode} mode.",
    "tree": "Folder tree has been generated and saved to '{output}'.",
    "list": "File list has been generated and saved to '{output}'.",
}


def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()

        root_dir = Path(args.folder_path).resolve()
        if not root_dir.is_dir():
            print(f"Error: The folder '{root_dir}' does not exist or is not a directory.", file=sys.stderr)
            sys.exit(1)

        output_file = Path(args.output).resolve()

        print("--- fcom ---")
        print(f"Scanning: {root_dir}")
        print(f"Output:   {output_file}")

        # 2. Filter + walk + render; everything fatal happens before the output is touched
        scanner = ProjectScanner(root_dir, build_filter(args, root_dir, output_file))
        content = COMMANDS[args.command](args, root_dir, scanner)

        # 3. Output
        try:
            output_file.write_text(content, encoding="utf-8")
        except OSError as e:
            print(f"Error writing file: {e}", file=sys.stderr)
            sys.exit(1)

        print(SUCCESS_MESSAGES[args.command].format(output=output_file, mode=getattr(args, "mode", "")))

    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
