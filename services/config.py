# services/config.py
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from core.models import CriterionDirection, RankingMethod
from core.profiles import DEFAULT_CRITERIA_TYPES, DEFAULT_RANKING_WEIGHTS, PROFILE_CRITERIA
from persistence.engine import load_env

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class RankingSettings:
    method: RankingMethod = RankingMethod.TOPSIS
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_RANKING_WEIGHTS))
    criteria_types: Dict[str, CriterionDirection] = field(default_factory=lambda: dict(DEFAULT_CRITERIA_TYPES))
    log_level: str = "INFO"


def parse_weights(raw: str, base: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
    """
    "cgpa=0.5, skills=0.1" -> defaults with those two entries replaced.
    """
    weights = dict(DEFAULT_RANKING_WEIGHTS if base is None else base)
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            raise ValueError(f"Malformed weight entry {pair!r}; expected name=value.")
        name, value = pair.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Malformed weight entry {pair!r}; missing criterion name.")
        try:
            weights[name] = float(value)
        except ValueError:
            raise ValueError(f"Weight for {name!r} is not a number: {value.strip()!r}") from None
    return weights


def parse_cost_criteria(raw: str) -> Dict[str, CriterionDirection]:
    cost = {c.strip() for c in raw.split(",") if c.strip()}
    types = {k: CriterionDirection.BENEFIT for k in PROFILE_CRITERIA}
    for name in cost:
        types[name] = CriterionDirection.COST
    return types


def get_ranking_settings(environ: Optional[Mapping[str, str]] = None) -> RankingSettings:
    if environ is None:
        load_env()
        environ = os.environ

    method = RankingMethod.parse(environ.get("RANKING_METHOD") or "TOPSIS", fallback=RankingMethod.TOPSIS)
    return RankingSettings(
        method=method,
        weights=parse_weights(environ.get("RANKING_WEIGHTS", "")),
        criteria_types=parse_cost_criteria(environ.get("RANKING_COST_CRITERIA", "")),
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
