import argparse
import json
from pathlib import Path

from . import __version__
from .database import init_database
from .env import get_settings, load_env
from .errors import PrerequisiteMissing, Unresolvable
from .recommender import Recommender
from .retry import RetryError
from .schema import validate_seed
from .storage import SqlDataSource, load_seed, seed_database


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else get_settings().db_path


def _require_db(db_path: Path) -> None:
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}. Run 'pathwise init-db' or 'pathwise seed' first.")


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    print(f"Initialized database at {db_path}")


def cmd_seed(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    data = load_seed(input_path)
    errors = validate_seed(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    counts = seed_database(_db_path(args), data)
    print(
        f"Done. paths new={counts['paths_new']} updated={counts['paths_updated']} "
        f"attempts={counts['attempts']} interest_answers={counts['interest_answers']}"
    )


def cmd_paths(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    _require_db(db_path)
    try:
        paths = SqlDataSource(db_path).get_career_paths()
    except RetryError as e:
        raise SystemExit(f"[error] {e}")
    if not paths:
        print("No career paths in catalog.")
        return
    print(f"Found {len(paths)} career paths in {db_path}:\n")
    for p in paths:
        print(f"ID: {p.id}")
        print(f"  Name: {p.name}")
        if p.description:
            print(f"  Description: {p.description}")
        print()


def cmd_recommend(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    _require_db(db_path)
    recommender = Recommender(SqlDataSource(db_path))
    try:
        result = recommender.recommend(args.user)
    except PrerequisiteMissing as e:
        print(f"{e}. Complete the interest questionnaire first.")
        raise SystemExit(2)
    except Unresolvable as e:
        print(f"[error] {e}")
        raise SystemExit(1)
    except RetryError as e:
        raise SystemExit(f"[error] {e}")

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    print(f"Recommended: {result.recommended_path_id}")
    print(f"Confidence: {result.confidence:.1f}%")
    print("Ranking:")
    for c in result.probabilities:
        print(f"  {c.path_key:<12} -> {c.career_path_id}  p={c.probability:.3f}  score={c.raw_score:.2f}")


def cmd_explain(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    _require_db(db_path)
    recommender = Recommender(SqlDataSource(db_path))
    try:
        details = recommender.explain(args.user)
    except PrerequisiteMissing as e:
        print(f"{e}. Complete the interest questionnaire first.")
        raise SystemExit(2)
    except RetryError as e:
        raise SystemExit(f"[error] {e}")

    source = "neutral default" if details["neutral_performance"] else "graded attempts"
    print(f"Performance ({source}):")
    for category, stats in details["performance"].items():
        print(f"  {category:<10} {stats['correct']}/{stats['total']} ({stats['accuracy']:.2f})")
    print("Affinities:")
    for category, value in details["affinities"].items():
        print(f"  {category:<10} {value:g}")
    print("Paths:")
    for p in details["paths"]:
        print(
            f"  {p['path_key']:<12} perf={p['performance_score']:.3f} "
            f"interest={p['interest_score']:.3f} score={p['score']:.2f} p={p['probability']:.3f}"
        )


def main(argv=None):
    # Load .env if present (PATHWISE_DB_PATH, PATHWISE_LOG_LEVEL, ...)
    load_env()
    try:
        get_settings()
    except ValueError as e:
        raise SystemExit(f"[error] {e}")
    parser = argparse.ArgumentParser(prog="pathwise", description="Pathwise career path recommender")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    db_help = "Path to SQLite database (default: PATHWISE_DB_PATH or data/pathwise.db)"

    ini = subparsers.add_parser("init-db", help="Create the database tables")
    ini.add_argument("--db", help=db_help)
    ini.set_defaults(func=cmd_init_db)

    sed = subparsers.add_parser("seed", help="Load career paths, attempts and answers from a JSON seed file")
    sed.add_argument("--input", required=True, help="Path to seed JSON")
    sed.add_argument("--db", help=db_help)
    sed.set_defaults(func=cmd_seed)

    pth = subparsers.add_parser("paths", help="List the career path catalog")
    pth.add_argument("--db", help=db_help)
    pth.set_defaults(func=cmd_paths)

    rec = subparsers.add_parser("recommend", help="Recommend a career path for a user")
    rec.add_argument("--user", required=True, help="User id")
    rec.add_argument("--json", action="store_true", help="Print the result as JSON")
    rec.add_argument("--db", help=db_help)
    rec.set_defaults(func=cmd_recommend)

    exp = subparsers.add_parser("explain", help="Show the performance, affinity and score breakdown for a user")
    exp.add_argument("--user", required=True, help="User id")
    exp.add_argument("--db", help=db_help)
    exp.set_defaults(func=cmd_explain)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
