import argparse
import json
from datetime import datetime
from pathlib import Path

from . import __version__
from .accuracy import score_artifact
from .baseline_accuracy import score_against_baseline
from .baselines import is_baseline_current, list_baselines, load_baseline, save_baseline
from .consensus import InsufficientDataError, build_consensus_from_files
from .consensus.confidence import rollup
from .env import db_path, load_env, log_dir, log_level
from .logger import get_logger
from .storage import load_artifact, save_result


def _read_input(path_str: str):
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    try:
        return load_artifact(input_path)
    except ValueError as e:
        raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_build(args: argparse.Namespace) -> None:
    logger = get_logger()
    if args.update and args.document:
        source = Path(args.document)
        if source.exists():
            modified_at = datetime.fromtimestamp(source.stat().st_mtime)
            if is_baseline_current(Path(args.db), args.document, modified_at):
                print(f"Baseline for {args.document} is up to date, skipping")
                return

    try:
        result = build_consensus_from_files(args.input, threshold=args.threshold)
    except InsufficientDataError as e:
        raise SystemExit(str(e))

    logger.info("Field confidence", **rollup(result.fields))

    payload = result.to_dict()
    if args.output:
        save_result(Path(args.output), payload)
        print(f"Consensus saved to {args.output}")
    else:
        _print_json(payload)

    if args.document:
        outcome = save_baseline(Path(args.db), args.document, result)
        print(f"Baseline: {args.document}")
        print(f"Status: {outcome['status']}")

    logger.log_metrics_summary()


def cmd_score(args: argparse.Namespace) -> None:
    data = _read_input(args.input)
    _print_json(score_artifact(data).to_dict())


def cmd_compare(args: argparse.Namespace) -> None:
    data = _read_input(args.input)
    baseline = load_baseline(Path(args.db), args.document)
    if baseline is None:
        raise SystemExit(f"No baseline stored for {args.document} in {args.db}")
    _print_json(score_against_baseline(data, baseline).to_dict())


def cmd_list(args: argparse.Namespace) -> None:
    store_path = Path(args.db)
    baselines = list_baselines(store_path)
    if not baselines:
        print("No baselines in store.")
        return
    print(f"Found {len(baselines)} baselines in {store_path}:\n")
    for baseline in baselines:
        print(f"Document: {baseline['document']}")
        print(f"  Providers: {baseline['providerCount']} ({', '.join(baseline['providers'])})")
        print(f"  Confidence: {baseline['overall']:.2f}")
        print(f"  Updated: {baseline['updatedAt']}")
        print()


def main():
    load_env()
    get_logger(level=log_level(), log_dir=log_dir(), enable_file=log_dir() is not None)
    default_db = str(db_path())

    parser = argparse.ArgumentParser(prog="creditfusion", description="Fuse credit extractions into a consensus record")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    bld = subparsers.add_parser("build", help="Build a consensus from several extraction JSON files")
    bld.add_argument("--input", required=True, nargs="+", help="Extraction JSON files (one per provider run)")
    bld.add_argument("--output", help="Write the consensus JSON here instead of stdout")
    bld.add_argument("--threshold", type=float, default=0.8, help="Title similarity needed to merge credits (default: 0.8)")
    bld.add_argument("--document", help="Also store the result as the baseline for this source document")
    bld.add_argument("--db", default=default_db, help=f"Path to baseline database (default: {default_db})")
    bld.add_argument("--update", action="store_true", help="Skip when the stored baseline is newer than the --document file")
    bld.set_defaults(func=cmd_build)

    scr = subparsers.add_parser("score", help="Score one extraction JSON for structure and completeness")
    scr.add_argument("--input", required=True, help="Path to extraction JSON")
    scr.set_defaults(func=cmd_score)

    cmp_ = subparsers.add_parser("compare", help="Score one extraction JSON against a stored baseline")
    cmp_.add_argument("--input", required=True, help="Path to extraction JSON")
    cmp_.add_argument("--document", required=True, help="Source document name the baseline was stored under")
    cmp_.add_argument("--db", default=default_db, help=f"Path to baseline database (default: {default_db})")
    cmp_.set_defaults(func=cmd_compare)

    lst = subparsers.add_parser("list", help="List stored baselines")
    lst.add_argument("--db", default=default_db, help=f"Path to baseline database (default: {default_db})")
    lst.set_defaults(func=cmd_list)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
