# talent_matcher/main.py
from __future__ import annotations

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from talent_matcher.compensation import align_profiles, get_compensation_badge_info
from talent_matcher.config import DEFAULT_CONFIG, EngineConfig, load_config
from talent_matcher.matching import find_top_matches
from talent_matcher.normalize import normalize_talent

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def _load_talent(path: Path) -> Dict[str, Any]:
    data = _load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Talent file must hold one JSON object: {path}")
    return data


def _load_opportunities(path: Path) -> List[Dict[str, Any]]:
    data = _load_json(path)
    if not isinstance(data, list):
        raise ValueError(f"Opportunities file must hold a JSON list: {path}")
    return [o for o in data if isinstance(o, dict)]


def build_report(
    talent: Dict[str, Any],
    opportunities: List[Dict[str, Any]],
    config: EngineConfig,
    top_n: Optional[int] = None,
    workers: Optional[int] = None,
) -> List[Dict[str, Any]]:
    t = normalize_talent(talent)
    ranked = find_top_matches(t, opportunities, limit=top_n, config=config, workers=workers)

    rows: List[Dict[str, Any]] = []
    for r in ranked:
        opp = r.subject
        alignment = align_profiles(t, opp, config=config)
        badge = get_compensation_badge_info(alignment.alignment, config=config)
        rows.append(
            {
                "opportunity_id": opp.get("id"),
                "title": opp.get("title", ""),
                "overall_score": r.match.overall_score,
                "recommendation": r.match.recommendation.value,
                "compensation_alignment": alignment.alignment.value,
                "compensation_badge": badge.label,
                "dimension_scores": r.match.dimension_scores(),
                "breakdown": [b.model_dump(mode="json") for b in r.match.breakdown],
            }
        )
    return rows


def _write_results(results: List[Dict[str, Any]], out_dir: Path, config: EngineConfig) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)

    out_json = out_dir / "results.json"
    out_csv = out_dir / "results.csv"

    out_json.write_text(json.dumps(results, indent=2, ensure_ascii=False), encoding="utf-8")

    dims = [d.value for d in config.weights.dimensions()]
    fieldnames = [
        "overall_score",
        "recommendation",
        "opportunity_id",
        "title",
        "compensation_alignment",
        "compensation_badge",
    ] + dims

    with out_csv.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in results:
            row = {k: r.get(k, "") for k in fieldnames if k not in dims}
            for d in dims:
                row[d] = r["dimension_scores"].get(d, "")
            writer.writerow(row)

    print(f"Wrote {len(results)} matches → {out_json}")
    print(f"Wrote CSV → {out_csv}")


def run(
    talent_path: str,
    opportunities_path: str,
    config_path: Optional[str] = None,
    out_dir: str = "data/results",
    top_n: Optional[int] = None,
    workers: Optional[int] = None,
) -> List[Dict[str, Any]]:
    config = load_config(config_path) if config_path else DEFAULT_CONFIG
    logger.debug("Using weights: %s", {d.value: config.weights.weight(d) for d in config.weights.dimensions()})

    talent = _load_talent(Path(talent_path).expanduser().resolve())
    opportunities = _load_opportunities(Path(opportunities_path).expanduser().resolve())
    if not opportunities:
        print(f"No opportunities found in {opportunities_path}")
        return []

    results = build_report(talent, opportunities, config, top_n=top_n, workers=workers)
    _write_results(results, Path(out_dir).expanduser().resolve(), config)
    return results


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Rank opportunities for one talent profile.")
    parser.add_argument("--talent", required=True, help="JSON file with one talent record")
    parser.add_argument("--opportunities", required=True, help="JSON file with a list of opportunity records")
    parser.add_argument("--config", default=None, help="Engine config YAML (defaults built in)")
    parser.add_argument("--out", default="data/results")
    parser.add_argument("--top-n", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    run(
        talent_path=args.talent,
        opportunities_path=args.opportunities,
        config_path=args.config,
        out_dir=args.out,
        top_n=args.top_n,
        workers=args.workers,
    )


if __name__ == "__main__":
    main()
