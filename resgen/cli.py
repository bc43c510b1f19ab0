"""CLI entrypoints for resgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .codegen import SourceWriter, declared_size, decode_literals
from .config import load_config
from .deps import DependencyReporter
from .errors import ResgenError
from .logging import configure_logging, get_logger
from .manifest import read_manifest
from .orchestrator import Compiler


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity and show chained causes on failure.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .resgen.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resgen",
        description="Compile GResource manifests and embed the bundles as Rust source.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile",
        help="Validate a manifest, pack it and generate the embedding module.",
    )
    _add_verbose_option(compile_parser, suppress_default=True)
    _add_config_option(compile_parser)
    compile_parser.add_argument(
        "name",
        help="Manifest base name; `app` reads `app.gresource.xml`.",
    )
    compile_parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory (defaults to $OUT_DIR or the configured directory).",
    )

    deps_parser = subparsers.add_parser(
        "deps",
        help="Validate a manifest and print its dependency declarations.",
    )
    _add_verbose_option(deps_parser, suppress_default=True)
    _add_config_option(deps_parser)
    deps_parser.add_argument("manifest", type=Path, help="Path to the manifest file.")

    embed_parser = subparsers.add_parser(
        "embed",
        help="Generate the embedding module for an existing bundle.",
    )
    _add_verbose_option(embed_parser, suppress_default=True)
    _add_config_option(embed_parser)
    embed_parser.add_argument("bundle", type=Path, help="Path to the packed bundle.")
    embed_parser.add_argument("output", type=Path, help="Path of the module to write.")
    embed_parser.add_argument(
        "--check",
        action="store_true",
        help="Re-read the written module and verify it reproduces the bundle.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    verbose = bool(args.verbose)
    configure_logging(verbose=verbose, log_file=args.log_file)
    logger = get_logger("cli")

    try:
        if args.command == "compile":
            config = load_config(args.config)
            outcome = Compiler(config, out_dir=args.out_dir).compile(args.name)
            logger.info("Generated %s", outcome.source_path)
        elif args.command == "deps":
            config = load_config(args.config)
            manifest = read_manifest(args.manifest)
            DependencyReporter(config.dependency_prefix).report_manifest(manifest)
        elif args.command == "embed":
            config = load_config(args.config)
            size = SourceWriter(config.templates_dir).write(args.bundle, args.output)
            if args.check:
                _check_module(args.bundle, args.output)
            logger.info("Embedded %d bytes into %s", size, args.output)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ResgenError, OSError) as exc:
        parser.exit(1, _describe_failure(exc, verbose=verbose))


def _check_module(bundle: Path, module: Path) -> None:
    text = module.read_text(encoding="utf-8")
    expected = bundle.read_bytes()
    if declared_size(text) != len(expected) or decode_literals(text) != expected:
        raise ResgenError(f"{module} does not reproduce {bundle}")


def _describe_failure(exc: BaseException, *, verbose: bool) -> str:
    lines = [f"resgen: {exc}"]
    if verbose:
        cause = exc.__cause__
        while cause is not None:
            lines.append(f"  caused by: {type(cause).__name__}: {cause}")
            cause = cause.__cause__
    else:
        lines.append("Run with --verbose for more details.")
    return "\n".join(lines) + "\n"


if __name__ == "__main__":
    main(sys.argv[1:])
