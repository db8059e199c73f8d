"""CLI for mooncats."""

import argparse
import logging
import os
import sys

from mooncats.doctree import document_folder
from mooncats.domain.models import BuildOptions, BuildResult, DEFAULT_LUALS_COMMAND
from mooncats.errors import MoonCatsError
from mooncats.location import FileUri
from mooncats.luals import generate_json_docs
from mooncats.mdbook import MoonCats, handle_preprocessing
from mooncats.output.json_dumper import JSONDumper
from mooncats.output.markdown import MarkdownRenderer
from mooncats.schema import load_definitions

logger = logging.getLogger(__name__)


def build_docs_folder(root_dir: str, output_dir: str, options: BuildOptions) -> BuildResult:
    """Main orchestration: definitions folder -> doc tree -> JSON (and markdown) output."""
    root_dir = os.path.abspath(root_dir)

    if options.doc_json:
        with open(options.doc_json, encoding='utf-8') as f:
            definitions = load_definitions(f.read())
    else:
        definitions = generate_json_docs(root_dir, options.luals_command)

    tree = document_folder(FileUri.from_path(root_dir), definitions)

    dumper = JSONDumper(output_dir, pretty=options.pretty)
    dumper.write_tree(tree)

    if options.markdown:
        MarkdownRenderer().write_all(tree, root_dir, output_dir)

    return BuildResult(
        definitions=len(definitions),
        files_loaded=sum(1 for root in tree for _ in root.walk()),
        root_files=len(tree),
        output_dir=output_dir,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog='mooncats', description='LuaCATS API documentation builder')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command')

    # build command
    build_parser = subparsers.add_parser('build', help='Build the doc tree of a definitions folder')
    build_parser.add_argument('root', help='Folder of LuaCATS definition files')
    build_parser.add_argument('output', help='Output directory')
    build_parser.add_argument('--doc-json', help='Use an existing doc.json instead of running lua-language-server')
    build_parser.add_argument('--luals', default=DEFAULT_LUALS_COMMAND, help='lua-language-server executable')
    build_parser.add_argument('--markdown', action='store_true', help='Also write one markdown page per file')
    build_parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')

    # mdbook preprocessor commands
    subparsers.add_parser('preprocess', help='Run as an mdbook preprocessor (stdin -> stdout)')
    supports_parser = subparsers.add_parser('supports', help='Check whether a renderer is supported')
    supports_parser.add_argument('renderer')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        stream=sys.stderr,
    )

    if args.command == 'build':
        if not os.path.isdir(args.root):
            print(f"Error: {args.root} is not a directory", file=sys.stderr)
            return 1

        options = BuildOptions(
            doc_json=args.doc_json,
            luals_command=args.luals,
            markdown=args.markdown,
            pretty=not args.no_pretty,
        )

        print(f"Documenting {args.root}...")
        try:
            result = build_docs_folder(args.root, args.output, options)
        except (MoonCatsError, OSError) as e:
            JSONDumper(args.output, pretty=options.pretty).write_errors([str(e)])
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"Done! {result.definitions} definitions in {result.files_loaded} files")
        print(f"Output: {result.output_dir}")

    elif args.command == 'preprocess':
        try:
            handle_preprocessing(MoonCats(), sys.stdin, sys.stdout)
        except MoonCatsError as e:
            print(f"{e}", file=sys.stderr)
            return 1

    elif args.command == 'supports':
        return 0 if MoonCats().supports_renderer(args.renderer) else 1

    else:
        parser.print_help()

    return 0


def mdbook_main(argv: list[str] | None = None) -> int:
    """Entry point for ``mdbook-mooncats``, the name mdbook invokes."""
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == 'supports':
        return main(argv)
    return main(['preprocess', *argv])


if __name__ == '__main__':
    sys.exit(main())
