from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _parse_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run the UI psychology rules against a directory of HTML screens and write MD/JSON outputs."
    )
    parser.add_argument("root", help="Directory containing the generated HTML screens.")
    parser.add_argument("--config", default=None, help="Rules config file (YAML or JSON).")
    parser.add_argument(
        "--scan-dirs",
        default=None,
        help="Comma-separated directories (relative to root) to scan; defaults to the whole tree.",
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Comma-separated path fragments to exclude (replaces the defaults).",
    )
    parser.add_argument("--out", default=None, help="Write the markdown report here.")
    parser.add_argument("--json", dest="json_out", default=None, help="Write the raw report JSON here.")
    parser.add_argument("--workers", type=int, default=None, help="Evaluate screens in a thread pool of this size.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    _ensure_backend_on_path()
    from common.rules_engine.config import ConfigurationError, UIRulesConfig, load_rules_config
    from common.rules_engine.models import Severity
    from pipelines.markdown_report import render_markdown
    from pipelines.screens import DEFAULT_EXCLUDE_PATTERNS, run_ui_review

    root = Path(args.root).resolve()
    if not root.is_dir():
        raise SystemExit(f"Screens directory not found: {root}")

    try:
        config = load_rules_config(Path(args.config)) if args.config else UIRulesConfig()
        report = run_ui_review(
            root,
            config=config,
            scan_dirs=_parse_csv(args.scan_dirs),
            exclude_patterns=DEFAULT_EXCLUDE_PATTERNS if args.exclude is None else _parse_csv(args.exclude),
            max_workers=args.workers,
        )
    except ConfigurationError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    markdown = render_markdown(report)
    if args.out:
        out_md = Path(args.out)
        out_md.write_text(markdown, encoding="utf-8")
        print(f"Wrote {out_md}")
    else:
        print(markdown)
    if args.json_out:
        out_json = Path(args.json_out)
        out_json.write_text(json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False), encoding="utf-8")
        print(f"Wrote {out_json}")

    return 1 if report.totals_by_severity.get(Severity.ERROR, 0) else 0


if __name__ == "__main__":
    raise SystemExit(main())
