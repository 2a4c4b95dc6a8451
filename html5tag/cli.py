"""Command-line interface for html5tag."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from pydantic import ValidationError as ModelValidationError

from .attributes import Attributes
from .config import load_attributes, load_render_options
from .errors import SinkError, ValidationError
from .io_utils import warn
from .models import RenderOptions, TagRenderRequest
from .tag import write_image, write_request
from .util import text_to_html


def _load_attributes(text: str) -> Attributes:
    try:
        return load_attributes(text)
    except ValidationError as exc:
        raise SystemExit(f"Invalid attributes: {exc}") from exc


def _load_options(text: str) -> RenderOptions:
    try:
        return load_render_options(text)
    except (ValidationError, ModelValidationError) as exc:
        raise SystemExit(f"Invalid render options: {exc}") from exc


def _handle_render(args: argparse.Namespace) -> None:
    options = _load_options(args.options)
    if args.formatted:
        options.sort_attributes = True
        options.pretty_print = True
    if args.no_space:
        options.no_space = True

    content = args.content
    if content is not None and args.text:
        content = text_to_html(content)
    if args.void and content is not None:
        warn(f"[render] ignoring --content for void tag <{args.tag}>")
        content = None

    try:
        request = TagRenderRequest(
            tag=args.tag,
            attributes=_load_attributes(args.attrs),
            content=content,
            is_void=True if args.void else None,
            options=options,
        )
    except ModelValidationError as exc:
        raise SystemExit(f"Invalid render request: {exc}") from exc

    try:
        write_request(sys.stdout, request)
        sys.stdout.write("\n")
    except SinkError as exc:
        raise SystemExit(f"Could not write output: {exc}") from exc


def _handle_image(args: argparse.Namespace) -> None:
    try:
        write_image(sys.stdout, args.src, args.alt, _load_attributes(args.attrs))
        sys.stdout.write("\n")
    except SinkError as exc:
        raise SystemExit(f"Could not write output: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="html5tag",
        description="Render HTML5 tags from attribute and style data",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="html5tag 0.1.0",
        help="Show the html5tag version and exit.",
    )

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Render a single tag to stdout.",
        description="Render a single tag to stdout.",
    )
    render_parser.add_argument("tag", help="Tag name, e.g. div.")
    render_parser.add_argument(
        "--attrs",
        default="",
        help="Attributes as a YAML mapping, e.g. '{id: main, class: box}'.",
    )
    render_parser.add_argument(
        "--content",
        default=None,
        help="Inner html of the tag. It is written as given unless --text is set.",
    )
    render_parser.add_argument(
        "--text",
        action="store_true",
        help="Treat --content as plain text: escape it and keep line breaks.",
    )
    render_parser.add_argument(
        "--void",
        action="store_true",
        help="Write only the opening tag.",
    )
    render_parser.add_argument(
        "--formatted",
        action="store_true",
        help="Sort attributes and indent the content.",
    )
    render_parser.add_argument(
        "--no-space",
        dest="no_space",
        action="store_true",
        help="Do not put newlines around the content.",
    )
    render_parser.add_argument(
        "--options",
        default="",
        help="Render options as YAML, e.g. '{sortAttributes: true}'.",
    )
    render_parser.set_defaults(func=_handle_render)

    image_parser = subparsers.add_parser(
        "image",
        help="Render an img tag to stdout.",
        description="Render an img tag to stdout.",
    )
    image_parser.add_argument("src", help="Image source url.")
    image_parser.add_argument("alt", help="Alternate text.")
    image_parser.add_argument(
        "--attrs",
        default="",
        help="Additional attributes as a YAML mapping.",
    )
    image_parser.set_defaults(func=_handle_image)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
