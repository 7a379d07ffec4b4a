import itertools
import logging
import random
from enum import Enum

from scratch.Card import CARD_SIZE, CardConfig, CardController, DEFAULT_CONFIGS
from scratch.Interface import Interface
from scratch.Mask import BRUSH_RADIUS, DEFAULT_THEME
from scratch.Scheduler import ClockScheduler

logger = logging.getLogger("luckyscratch.round")

MIN_ACTIVE_CARDS = 1
MAX_ACTIVE_CARDS = 5
DEFAULT_ACTIVE_CARDS = 3
REVEAL_OTHERS_DELAY_MS = 500


def clampCardCount(value):
    try:
        count = int(value)
    except (TypeError, ValueError):
        return DEFAULT_ACTIVE_CARDS
    if count < MIN_ACTIVE_CARDS:
        count = MIN_ACTIVE_CARDS
    if count > MAX_ACTIVE_CARDS:
        count = MAX_ACTIVE_CARDS
    return count


class Phase(Enum):
    PLAYING = "playing"
    FINISHED = "finished"


class Mode(Enum):
    SETUP = "editor"
    PLAY = "play"


class RoundEvent:
    pass


class ScratchStarted(RoundEvent):
    def __init__(self, slot):
        self.slot = slot


class CardRevealed(RoundEvent):
    def __init__(self, slot, content):
        self.slot = slot
        self.content = content


class OthersRevealed(RoundEvent):
    def __init__(self, slots):
        self.slots = tuple(slots)


class Shuffled(RoundEvent):
    def __init__(self, slots):
        self.slots = tuple(slots)


class RoundCard:
    def __init__(self, config: CardConfig, roundSlot: str, controller: CardController = None):
        self.config = config
        self.roundSlot = roundSlot
        self.isWinner = False
        self.controller = controller

    @property
    def revealed(self):
        return self.controller is not None and self.controller.isRevealed()

    @property
    def mask(self):
        return self.controller.mask

    def __repr__(self):
        return f"RoundCard({self.roundSlot}, {self.config.content!r}, revealed={self.revealed})"


class RoundState:
    def __init__(self, cards):
        self.phase = Phase.PLAYING
        self.cards = cards
        self.startedSlot = None
        self.winnerSlot = None
        self.result = None

    def card(self, slot):
        for card in self.cards:
            if card.roundSlot == slot:
                return card
        return None

    def slots(self):
        return [card.roundSlot for card in self.cards]

    def isFinished(self):
        return self.phase == Phase.FINISHED


class RoundStateMachine:
    """
    Owns the cards of the current round and every transition between rounds.

    start / replay / shuffle always build brand new cards (new slots, new masks), so nothing
    from a discarded round can touch the current one. Stale controllers that still call back
    are ignored because their slots are unknown to the current state.
    """

    def __init__(self, scheduler=None, rng: random.Random = None, activeCount=DEFAULT_ACTIVE_CARDS,
                 cardWidth=CARD_SIZE, cardHeight=CARD_SIZE, pixelRatio=1.0, colorTheme=DEFAULT_THEME,
                 brushRadius=BRUSH_RADIUS):
        self.interface = Interface()
        self.scheduler = scheduler if scheduler is not None else ClockScheduler()
        self.rng = rng if rng is not None else random.Random()
        self.activeCount = clampCardCount(activeCount)
        self.cardWidth = cardWidth
        self.cardHeight = cardHeight
        self.pixelRatio = pixelRatio
        self.colorTheme = colorTheme
        self.brushRadius = brushRadius

        self.mode = Mode.SETUP
        self.configs = tuple(DEFAULT_CONFIGS)
        self.shuffleEnabled = False
        self.state: RoundState = None
        self.pendingReveal = None
        self.slotCounter = itertools.count()

    def registerInterface(self, interface):
        self.interface = interface
        interface.machine = self

    def setActiveCount(self, count):
        self.activeCount = clampCardCount(count)
        return self.activeCount

    def activeConfigs(self):
        return self.configs[:self.activeCount]

    def __nextSlot(self):
        return f"card-{next(self.slotCounter)}"

    def __buildCards(self, shuffle):
        configs = list(self.activeConfigs())
        if shuffle:
            # Random.shuffle is a Fisher-Yates pass, every permutation equally likely
            self.rng.shuffle(configs)
        cards = []
        for config in configs:
            slot = self.__nextSlot()
            card = RoundCard(config, slot)
            card.controller = CardController(
                slot, config,
                listener=self,
                isLocked=lambda s=slot: self.isLocked(s),
                width=self.cardWidth,
                height=self.cardHeight,
                pixelRatio=self.pixelRatio,
                colorTheme=self.colorTheme,
                brushRadius=self.brushRadius,
            )
            cards.append(card)
        return cards

    def __cancelPending(self):
        if self.pendingReveal is not None:
            self.pendingReveal.cancel()
            self.pendingReveal = None

    def start(self, configs=None, shuffle=None):
        if configs is not None:
            self.configs = tuple(configs)
        if shuffle is not None:
            self.shuffleEnabled = bool(shuffle)
        self.__cancelPending()
        self.state = RoundState(self.__buildCards(self.shuffleEnabled))
        self.mode = Mode.PLAY
        logger.info("round started with %d card(s), shuffle=%s", len(self.state.cards), self.shuffleEnabled)
        self.interface.onStart()
        return self.state

    def replay(self):
        return self.start()

    def shuffle(self) -> bool:
        if not self.canShuffle():
            logger.debug("shuffle refused")
            return False
        self.__cancelPending()
        self.state = RoundState(self.__buildCards(True))
        logger.info("cards reshuffled: %s", ", ".join(self.state.slots()))
        self.interface.onEvent(Shuffled(self.state.slots()))
        return True

    def canShuffle(self):
        state = self.state
        return state is not None and state.phase == Phase.PLAYING and state.startedSlot is None

    def resetToSetup(self):
        self.__cancelPending()
        self.state = None
        self.mode = Mode.SETUP
        logger.info("back to setup")
        self.interface.onReset()

    def isLocked(self, slot) -> bool:
        state = self.state
        if state is None or state.card(slot) is None:
            return True
        if state.phase == Phase.FINISHED:
            return slot != state.winnerSlot
        return state.startedSlot is not None and state.startedSlot != slot

    def onCardScratchStarted(self, slot) -> bool:
        state = self.state
        if state is None or state.phase != Phase.PLAYING or state.card(slot) is None:
            return False
        if state.startedSlot is not None:
            logger.debug("card %s already started, ignoring %s", state.startedSlot, slot)
            return False
        state.startedSlot = slot
        self.interface.onEvent(ScratchStarted(slot))
        return True

    def onCardRevealed(self, slot, content) -> bool:
        state = self.state
        if state is None or state.phase != Phase.PLAYING:
            return False
        card = state.card(slot)
        if card is None:
            return False
        state.phase = Phase.FINISHED
        state.winnerSlot = slot
        state.startedSlot = None
        state.result = content
        card.isWinner = True
        logger.info("card %s won: %s", slot, content)

        self.__cancelPending()
        self.pendingReveal = self.scheduler.schedule(
            REVEAL_OTHERS_DELAY_MS, lambda st=state: self.revealOthers(st))
        self.interface.onEvent(CardRevealed(slot, content))
        self.interface.onFinish(content)
        return True

    def revealOthers(self, state: RoundState):
        if state is not self.state:
            return []
        self.pendingReveal = None
        slots = [card.roundSlot for card in state.cards
                 if not card.isWinner and card.controller.forceReveal()]
        logger.info("revealed %d remaining card(s)", len(slots))
        self.interface.onEvent(OthersRevealed(slots))
        return slots

    def cardAt(self, slot):
        if self.state is None:
            return None
        return self.state.card(slot)

    def pressCard(self, slot, point) -> bool:
        card = self.cardAt(slot)
        if card is None:
            return False
        ok = card.controller.gestureStart(point)
        self.interface.notifyRedraw()
        return ok

    def dragCard(self, slot, point) -> bool:
        card = self.cardAt(slot)
        if card is None:
            return False
        ok = card.controller.gestureMove(point)
        if ok:
            self.interface.notifyRedraw()
        return ok

    def releaseCard(self, slot) -> bool:
        card = self.cardAt(slot)
        if card is None:
            return False
        return card.controller.gestureEnd()
