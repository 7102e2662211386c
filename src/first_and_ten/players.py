from __future__ import annotations
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from .config import DEFAULT_TIER, MIN_TIER, MAX_TIER, NEUTRAL_TRAIT_SCORE, WITHIN_TIER_MAX_OFFSET
from .enums import PosGroup

__all__ = [
    "Player",
    "Roster",
    "replacement_player",
    "effective_tier",
    "build_roster",
    "create_test_roster",
]

# per-game QB volume keys used for playstyle classification
STAT_KEYS = ("att_pg", "passing_att_pg", "rush_att_pg", "rush_yds_pg", "yds_pg", "passing_yds_pg")

# legacy roster arrays collapse onto the single canonical slot
LEGACY_ARRAYS = {"RB": "RBs", "OL": "OLs", "DL": "DLs", "LB": "LBs"}


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(out) else out


def _to_pos(value: Any) -> Optional[PosGroup]:
    if isinstance(value, PosGroup):
        return value
    try:
        return PosGroup(str(value).upper())
    except ValueError:
        return None


@dataclass(frozen=True)
class Player:
    name: str
    tier: float = DEFAULT_TIER
    pos_group: Optional[PosGroup] = None
    engine_traits: Dict[str, float] = field(default_factory=dict)
    composite_score: Optional[float] = None
    stats: Dict[str, float] = field(default_factory=dict)
    base_tier: Optional[float] = None    # tier before within-tier variance / boosts

    @classmethod
    def from_dict(cls, card: Mapping[str, Any], pos_group: Optional[PosGroup] = None) -> "Player":
        """Build a player from a raw card mapping. Missing or junk fields fall back to defaults."""
        pos = _to_pos(card.get("pos_group") or card.get("position")) or pos_group
        # tier 0 / missing / non-numeric all mean "unknown" -> default
        tier = _to_float(card.get("tier"))
        if tier is None or tier <= 0:
            tier = float(DEFAULT_TIER)

        traits = {}
        raw_traits = card.get("engine_traits")
        if isinstance(raw_traits, Mapping):
            for k, v in raw_traits.items():
                fv = _to_float(v)
                if fv is not None:
                    traits[str(k)] = fv

        stats = {}
        nested = card.get("stats") if isinstance(card.get("stats"), Mapping) else {}
        for key in STAT_KEYS:
            fv = _to_float(card.get(key, nested.get(key)))
            if fv is not None:
                stats[key] = fv

        name = card.get("player") or card.get("name") or f"{pos.value if pos else 'Unknown'} player"
        return cls(
            name=str(name),
            tier=tier,
            pos_group=pos,
            engine_traits=traits,
            composite_score=_to_float(card.get("composite_score")),
            stats=stats,
        )

    def trait(self, name: str) -> Optional[float]:
        return self.engine_traits.get(name)

    def with_tier(self, tier: float) -> "Player":
        base = self.base_tier if self.base_tier is not None else self.tier
        return replace(self, tier=float(tier), base_tier=base)

    def trait_score(self) -> float:
        """0-100 quality score: mean engine trait, else composite score, else neutral."""
        if self.engine_traits:
            return float(np.mean(list(self.engine_traits.values())))
        if self.composite_score is not None:
            return float(np.clip(self.composite_score, 0.0, 100.0))
        return NEUTRAL_TRAIT_SCORE


def replacement_player(pos_group: PosGroup) -> Player:
    return Player(name=f"Replacement {pos_group.value}", tier=float(DEFAULT_TIER), pos_group=pos_group)


def effective_tier(player: Player) -> float:
    """Tier nudged by at most WITHIN_TIER_MAX_OFFSET according to the player's trait score."""
    offset = WITHIN_TIER_MAX_OFFSET * ((player.trait_score() - NEUTRAL_TRAIT_SCORE) / NEUTRAL_TRAIT_SCORE)
    return float(np.clip(player.tier + offset, MIN_TIER, MAX_TIER))


def _average_player(players: List[Player], pos_group: PosGroup) -> Player:
    if not players:
        return replacement_player(pos_group)
    if len(players) == 1:
        return players[0]
    scores = [p.composite_score for p in players if p.composite_score is not None]
    return Player(
        name=" / ".join(p.name for p in players),
        tier=float(np.mean([p.tier for p in players])),
        pos_group=pos_group,
        composite_score=float(np.mean(scores)) if scores else None,
    )


def _coerce_player(value: Any, pos_group: PosGroup) -> Optional[Player]:
    if isinstance(value, Player):
        return value if value.pos_group is not None else replace(value, pos_group=pos_group)
    if isinstance(value, Mapping):
        return Player.from_dict(value, pos_group=pos_group)
    return None


def _coerce_many(values: Any, pos_group: PosGroup) -> List[Player]:
    if not isinstance(values, (list, tuple)):
        return []
    out = []
    for v in values:
        p = _coerce_player(v, pos_group)
        if p is not None:
            out.append(p)
    return out


def _pad(players: List[Player], pos_group: PosGroup, n: int = 2) -> Tuple[Player, ...]:
    players = list(players)
    while len(players) < n:
        players.append(replacement_player(pos_group))
    return tuple(players)


def _slot(pos_group: PosGroup):
    return field(default_factory=lambda: replacement_player(pos_group))


def _pair(pos_group: PosGroup):
    return field(default_factory=lambda: _pad([], pos_group))


@dataclass(frozen=True)
class Roster:
    """Canonical starting lineup: QB, RB, 2 WR, TE, OL, DL, LB, 2 DB, K (+ optional P)."""
    qb: Player = _slot(PosGroup.QB)
    rb: Player = _slot(PosGroup.RB)
    wrs: Tuple[Player, ...] = _pair(PosGroup.WR)
    te: Player = _slot(PosGroup.TE)
    ol: Player = _slot(PosGroup.OL)
    dl: Player = _slot(PosGroup.DL)
    lb: Player = _slot(PosGroup.LB)
    dbs: Tuple[Player, ...] = _pair(PosGroup.DB)
    k: Player = _slot(PosGroup.K)
    p: Player = _slot(PosGroup.P)

    # ---------- construction ----------
    @classmethod
    def coerce(cls, obj: Any) -> "Roster":
        """Accept a Roster, a canonical or legacy mapping, or a list of player cards."""
        if isinstance(obj, Roster):
            return obj
        if obj is None:
            return cls()
        if isinstance(obj, Mapping):
            return cls.from_mapping(obj)
        return build_roster(obj)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Roster":
        singles: Dict[str, Player] = {}
        for pos in (PosGroup.QB, PosGroup.RB, PosGroup.TE, PosGroup.OL, PosGroup.DL,
                    PosGroup.LB, PosGroup.K, PosGroup.P):
            player = _coerce_player(data.get(pos.value), pos)
            if player is None and pos.value in LEGACY_ARRAYS:
                group = _coerce_many(data.get(LEGACY_ARRAYS[pos.value]), pos)
                player = _average_player(group, pos) if group else None
            singles[pos.value] = player if player is not None else replacement_player(pos)

        return cls(
            qb=singles["QB"],
            rb=singles["RB"],
            wrs=_pad(_coerce_many(data.get("WRs"), PosGroup.WR), PosGroup.WR),
            te=singles["TE"],
            ol=singles["OL"],
            dl=singles["DL"],
            lb=singles["LB"],
            dbs=_pad(_coerce_many(data.get("DBs"), PosGroup.DB), PosGroup.DB),
            k=singles["K"],
            p=singles["P"],
        )

    # ---------- views ----------
    def slots(self) -> Iterator[Tuple[PosGroup, Player]]:
        yield PosGroup.QB, self.qb
        yield PosGroup.RB, self.rb
        for wr in self.wrs:
            yield PosGroup.WR, wr
        yield PosGroup.TE, self.te
        yield PosGroup.OL, self.ol
        yield PosGroup.DL, self.dl
        yield PosGroup.LB, self.lb
        for db in self.dbs:
            yield PosGroup.DB, db
        yield PosGroup.K, self.k
        yield PosGroup.P, self.p

    def targets(self) -> List[Player]:
        return list(self.wrs) + [self.te]

    def tier_sum(self) -> float:
        """Sum of the 11 starting tiers (punter excluded)."""
        return float(sum(p.tier for pos, p in self.slots() if pos is not PosGroup.P))

    # ---------- transforms ----------
    def _map(self, fn) -> "Roster":
        return Roster(
            qb=fn(PosGroup.QB, self.qb),
            rb=fn(PosGroup.RB, self.rb),
            wrs=tuple(fn(PosGroup.WR, p) for p in self.wrs),
            te=fn(PosGroup.TE, self.te),
            ol=fn(PosGroup.OL, self.ol),
            dl=fn(PosGroup.DL, self.dl),
            lb=fn(PosGroup.LB, self.lb),
            dbs=tuple(fn(PosGroup.DB, p) for p in self.dbs),
            k=fn(PosGroup.K, self.k),
            p=fn(PosGroup.P, self.p),
        )

    def with_multipliers(self, multipliers: Mapping[PosGroup, float]) -> "Roster":
        """Clone the roster with each position group's tier scaled by its multiplier."""
        def _boost(pos: PosGroup, player: Player) -> Player:
            mult = multipliers.get(pos, 1.0)
            return player if mult == 1.0 else player.with_tier(player.tier * mult)
        return self._map(_boost)

    def with_effective_tiers(self) -> "Roster":
        return self._map(lambda pos, player: player.with_tier(effective_tier(player)))


def build_roster(cards: Iterable[Any]) -> Roster:
    """
    Slot a flat list of cards into the canonical lineup by pos_group.
    First card wins for single slots; WR and DB take the first two.
    Cards with an unknown position are ignored.
    """
    singles: Dict[PosGroup, Player] = {}
    wrs: List[Player] = []
    dbs: List[Player] = []
    for card in cards:
        if isinstance(card, Player):
            player = card
        elif isinstance(card, Mapping):
            player = Player.from_dict(card)
        else:
            continue
        pos = player.pos_group
        if pos is None:
            continue
        if pos is PosGroup.WR:
            if len(wrs) < 2:
                wrs.append(player)
        elif pos is PosGroup.DB:
            if len(dbs) < 2:
                dbs.append(player)
        elif pos not in singles:
            singles[pos] = player

    def _get(pos: PosGroup) -> Player:
        return singles.get(pos) or replacement_player(pos)

    return Roster(
        qb=_get(PosGroup.QB), rb=_get(PosGroup.RB), wrs=_pad(wrs, PosGroup.WR),
        te=_get(PosGroup.TE), ol=_get(PosGroup.OL), dl=_get(PosGroup.DL),
        lb=_get(PosGroup.LB), dbs=_pad(dbs, PosGroup.DB), k=_get(PosGroup.K), p=_get(PosGroup.P),
    )


def create_test_roster(tiers: Optional[Mapping[str, float]] = None, **kwargs: float) -> Roster:
    """Placeholder roster, e.g. create_test_roster(QB=8, WR=7); unspecified groups are tier 5."""
    spec = {str(k).upper(): v for k, v in dict(tiers or {}, **kwargs).items()}

    def _card(pos: PosGroup, label: str) -> Player:
        tier = _to_float(spec.get(pos.value))
        return Player(name=f"Test {label}", tier=tier if tier else float(DEFAULT_TIER), pos_group=pos)

    return Roster(
        qb=_card(PosGroup.QB, "QB"),
        rb=_card(PosGroup.RB, "RB"),
        wrs=(_card(PosGroup.WR, "WR1"), _card(PosGroup.WR, "WR2")),
        te=_card(PosGroup.TE, "TE"),
        ol=_card(PosGroup.OL, "OL"),
        dl=_card(PosGroup.DL, "DL"),
        lb=_card(PosGroup.LB, "LB"),
        dbs=(_card(PosGroup.DB, "DB1"), _card(PosGroup.DB, "DB2")),
        k=_card(PosGroup.K, "K"),
        p=_card(PosGroup.P, "P"),
    )
