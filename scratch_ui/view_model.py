from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    slot: str
    kind: str
    content: str
    revealed: bool
    is_winner: bool
    locked: bool


@dataclass(frozen=True)
class RoundViewModel:
    mode: str
    phase: str | None
    started_slot: str | None
    winner_slot: str | None
    result: str | None
    headline: str | None
    can_shuffle: bool
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
