"""CLI: serve, tree."""

import argparse
import json
import logging
import os
import sys

from .config import load_config, parse_max_depth, parse_port


def _setup_logging() -> None:
    level = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _port_arg(value: str) -> int:
    """argparse type: TCP port 1-65535, same bounds as PORT."""
    port = parse_port(value, default=0)
    if not port:
        raise argparse.ArgumentTypeError(f"invalid port {value!r} (expected 1-65535)")
    return port


def _depth_arg(value: str) -> int:
    """argparse type: depth >= 1; omit the flag for an unbounded walk."""
    depth = parse_max_depth(value)
    if depth is None:
        raise argparse.ArgumentTypeError(f"invalid depth {value!r} (expected an integer >= 1)")
    return depth


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the archive web server."""
    from .web import create_app

    config = load_config(
        content_root=args.content_root,
        public_dir=args.public_dir,
        host=args.host,
        port=args.port,
    )
    if not config.content_root.is_dir():
        logging.warning("Content root %s is missing; the tree will be empty.", config.content_root)
    app = create_app(config)
    use_debug = args.debug and os.environ.get("PRODUCTION") != "1"
    if args.debug and not use_debug:
        logging.warning("PRODUCTION=1 is set; debug mode disabled for security.")
    elif use_debug:
        logging.warning("Running with debug=True. Do not use in production (exposes tracebacks).")
    logging.info("Listening on http://%s:%d", config.host, config.port)
    try:
        app.run(host=config.host, port=config.port, debug=use_debug)
    except (OSError, OverflowError) as e:
        logging.error("Cannot listen on %s:%d: %s", config.host, config.port, e)
        return 1
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    """Print the content tree as JSON."""
    from .tree import build_tree

    config = load_config(content_root=args.content_root, tree_max_depth=args.max_depth)
    tree = build_tree(
        config.content_root,
        virtual_root=config.virtual_root,
        thumbnail_prefix=config.thumbnail_prefix,
        max_depth=config.tree_max_depth,
    )
    print(json.dumps(tree, ensure_ascii=False, indent=2))
    return 0


def main() -> int:
    _setup_logging()
    parser = argparse.ArgumentParser(
        prog="works_archive", description="Works archive: content tree API and document pages"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Run web server")
    p_serve.add_argument(
        "--content-root",
        type=str,
        default=None,
        help="Directory with <year>/<title>.md documents (default: ARCHIVE_CONTENT_ROOT or ./works)",
    )
    p_serve.add_argument(
        "--public-dir",
        type=str,
        default=None,
        help="Static assets directory (default: ARCHIVE_PUBLIC_DIR or ./public)",
    )
    p_serve.add_argument(
        "--host", type=str, default=None, help="Bind host (default: ARCHIVE_HOST or 0.0.0.0)"
    )
    p_serve.add_argument(
        "--port", "-p", type=_port_arg, default=None, help="Port (default: PORT or 8080)"
    )
    p_serve.add_argument("--debug", action="store_true", help="Flask debug")
    p_serve.set_defaults(func=cmd_serve)

    # tree
    p_tree = sub.add_parser("tree", help="Print content tree as JSON")
    p_tree.add_argument("--content-root", type=str, default=None, help="Content root directory")
    p_tree.add_argument(
        "--max-depth",
        type=_depth_arg,
        default=None,
        help="List entries at most N levels below the root (default: ARCHIVE_TREE_MAX_DEPTH or unbounded)",
    )
    p_tree.set_defaults(func=cmd_tree)

    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
