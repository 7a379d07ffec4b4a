import logging
from dataclasses import dataclass
from enum import Enum

from scratch.Mask import BRUSH_RADIUS, DEFAULT_THEME, OcclusionMask
from scratch.Stroke import StrokeTracker

logger = logging.getLogger("luckyscratch.card")

CARD_SIZE = 200
CHECK_EVERY_MOVES = 5


class ContentKind(Enum):
    TEXT = "text"
    IMAGE = "image"

    @staticmethod
    def parse(value, default=None):
        if isinstance(value, ContentKind):
            return value
        try:
            return ContentKind(str(value).strip().lower())
        except ValueError:
            return default if default is not None else ContentKind.TEXT


@dataclass(frozen=True)
class CardConfig:
    id: int
    contentKind: ContentKind
    content: str

    def isImage(self):
        return self.contentKind == ContentKind.IMAGE


DEFAULT_CONFIGS = (
    CardConfig(1, ContentKind.TEXT, "Better Luck Next Time!"),
    CardConfig(2, ContentKind.TEXT, "Free Coffee ☕"),
    CardConfig(3, ContentKind.TEXT, "$10 Gift Card 🎁"),
    CardConfig(4, ContentKind.TEXT, "High Five ✋"),
    CardConfig(5, ContentKind.TEXT, "Mystery Prize ❓"),
)


class CardState(Enum):
    IDLE = "idle"
    SCRATCHING = "scratching"
    REVEALED = "revealed"


class CardController:
    """
    Lifecycle of one card: IDLE -> SCRATCHING -> REVEALED.

    The listener gets onCardScratchStarted(slot) once per card and onCardRevealed(slot, content)
    once, when the scratched area crosses the reveal threshold. isLocked is queried on every
    gesture, the lock policy itself belongs to whoever owns the card.
    """

    def __init__(self, slot, config: CardConfig, listener=None, isLocked=None,
                 width=CARD_SIZE, height=CARD_SIZE, pixelRatio=1.0, colorTheme=DEFAULT_THEME,
                 brushRadius=BRUSH_RADIUS, revealed=False):
        self.slot = slot
        self.config = config
        self.listener = listener
        self.isLocked = isLocked
        self.state = CardState.IDLE
        self.startSignalled = False
        self.moveCount = 0

        self.mask = OcclusionMask().initialize(width, height, pixelRatio, colorTheme)
        self.tracker = StrokeTracker(self.mask, brushRadius, guard=self.acceptsInput,
                                     onCheck=self.checkRevealProgress)
        if revealed:
            self.mask.forceClear()
            self.state = CardState.REVEALED

    def locked(self):
        return self.isLocked is not None and bool(self.isLocked())

    def isRevealed(self):
        return self.state == CardState.REVEALED

    def acceptsInput(self):
        return not self.locked() and not self.isRevealed()

    def attemptStart(self) -> bool:
        if not self.acceptsInput():
            return False
        if self.state == CardState.IDLE:
            self.state = CardState.SCRATCHING
        if not self.startSignalled:
            self.startSignalled = True
            if self.listener is not None:
                self.listener.onCardScratchStarted(self.slot)
        return True

    def gestureStart(self, point) -> bool:
        if not self.attemptStart():
            return False
        self.tracker.onGestureStart(point)
        return True

    def gestureMove(self, point) -> bool:
        if not self.tracker.onGestureMove(point):
            return False
        self.moveCount += 1
        if self.moveCount % CHECK_EVERY_MOVES == 0:
            self.checkRevealProgress()
        return True

    def gestureEnd(self) -> bool:
        return self.tracker.onGestureEnd()

    def checkRevealProgress(self) -> bool:
        if self.isRevealed() or self.locked():
            return False
        if not self.mask.isRevealComplete():
            return False
        # wipe the leftover specks so the prize shows cleanly
        self.mask.forceClear()
        self.state = CardState.REVEALED
        self.tracker.cancel()
        logger.debug("card %s crossed the reveal threshold", self.slot)
        if self.listener is not None:
            self.listener.onCardRevealed(self.slot, self.config.content)
        return True

    def forceReveal(self) -> bool:
        if self.isRevealed():
            return False
        self.mask.forceClear()
        self.state = CardState.REVEALED
        self.tracker.cancel()
        return True
