import argparse
import random
import time

from PIL import Image

from scratch.Card import CARD_SIZE
from scratch.Interface import Interface
from scratch.Log import setupLogging
from scratch.Round import (
    DEFAULT_ACTIVE_CARDS,
    Mode,
    OthersRevealed,
    RoundStateMachine,
    Shuffled,
    clampCardCount,
)
from scratch.Scheduler import ClockScheduler

MASK_COLS = 16
MASK_ROWS = 8

HELP = """Commands:
  start                   start a round with the current setup
  count N                 number of cards (1-5), setup only
  toggle                  toggle shuffling, setup only
  scratch N x,y x,y ...   press card N at the first point and drag through the rest
  wipe N                  scratch card N row by row
  shuffle                 reshuffle (only before scratching)
  replay                  start over with the same cards
  edit                    back to setup
  show                    print the table
  quit"""


def parsePoint(text):
    (x, y) = text.split(",")
    return float(x), float(y)


def parsePoints(tokens):
    return [parsePoint(t) for t in tokens]


def wipePath(width, height, step):
    points = []
    y = step / 2
    leftToRight = True
    while y < height:
        xs = (0, width) if leftToRight else (width, 0)
        points.append((xs[0], y))
        points.append((xs[1], y))
        leftToRight = not leftToRight
        y += step
    return points


def maskRows(mask, cols=MASK_COLS, rows=MASK_ROWS):
    small = mask.bitmap.resize((cols, rows), Image.BOX)
    lines = []
    for y in range(rows):
        lines.append("".join("#" if small.getpixel((x, y)) > 127 else "." for x in range(cols)))
    return lines


class CommandLineInterface(Interface):

    def __init__(self):
        super().__init__()
        self.dirty = False

    def printAll(self):
        machine = self.machine
        state = machine.state
        if machine.mode == Mode.SETUP or state is None:
            shuffle = "on" if machine.shuffleEnabled else "off"
            print(f"Setup: {machine.activeCount} card(s), shuffle {shuffle}")
            for i, config in enumerate(machine.activeConfigs()):
                print(f"  {i + 1}. [{config.contentKind.value}] {config.content}")
            print()
            return

        if state.isFinished():
            print(f"Result: You found: {headline(state)}")
        elif state.startedSlot is not None:
            print("Finish scratching this card!")
        else:
            print("Pick a card to scratch!")

        header = ""
        blocks = []
        for i, card in enumerate(state.cards):
            if card.isWinner:
                tag = "WIN"
            elif machine.isLocked(card.roundSlot):
                tag = "locked"
            else:
                tag = ""
            header += f"{i + 1:>2} {tag:<{MASK_COLS - 2}} "
            blocks.append(maskRows(card.mask))
        print(header)
        for row in range(MASK_ROWS):
            print(" ".join(block[row] for block in blocks))
        for i, card in enumerate(state.cards):
            if card.revealed:
                print(f"  {i + 1}: {card.config.content}")
        print()

    def onStart(self):
        print("Round started!")
        self.dirty = True

    def onEvent(self, event):
        if isinstance(event, OthersRevealed):
            print("All cards revealed.")
        elif isinstance(event, Shuffled):
            print("Shuffled!")
        self.dirty = True

    def onFinish(self, result):
        print(f"You found: {result}")

    def onReset(self):
        self.dirty = True

    def notifyRedraw(self):
        self.dirty = True

    def flush(self):
        if self.dirty:
            self.dirty = False
            self.printAll()


def headline(state):
    card = state.card(state.winnerSlot)
    if card is not None and card.config.isImage():
        return "A Prize!"
    return state.result


def slotOf(machine, text):
    try:
        idx = int(text) - 1
    except ValueError:
        return None
    if machine.state is None or not 0 <= idx < len(machine.state.cards):
        return None
    return machine.state.cards[idx].roundSlot


def runCommand(machine, line):
    """Executes one command line. Returns False when the session should end."""
    parts = line.split()
    if not parts:
        return True
    command = parts[0]
    if command == "quit":
        return False
    if command == "start":
        machine.start()
    elif command == "count" and len(parts) > 1:
        if machine.mode != Mode.SETUP:
            print("Go back to setup first (edit).")
        else:
            machine.setActiveCount(parts[1])
            machine.interface.notifyRedraw()
    elif command == "toggle":
        if machine.mode != Mode.SETUP:
            print("Go back to setup first (edit).")
        else:
            machine.shuffleEnabled = not machine.shuffleEnabled
            machine.interface.notifyRedraw()
    elif command in ("scratch", "wipe") and len(parts) > 1:
        slot = slotOf(machine, parts[1])
        if slot is None:
            print("Invalid card!")
            return True
        if command == "wipe":
            points = wipePath(machine.cardWidth, machine.cardHeight, machine.brushRadius)
        else:
            try:
                points = parsePoints(parts[2:])
            except ValueError:
                print("Invalid point!")
                return True
        if not points:
            print("Invalid point!")
            return True
        if not machine.pressCard(slot, points[0]):
            print("That card is locked!")
            return True
        for p in points[1:]:
            machine.dragCard(slot, p)
        machine.releaseCard(slot)
    elif command == "shuffle":
        if not machine.shuffle():
            print("Cannot shuffle now!")
    elif command == "replay":
        if machine.mode != Mode.PLAY:
            print("No round to replay!")
        else:
            machine.replay()
    elif command == "edit":
        machine.resetToSetup()
    elif command == "show":
        machine.interface.notifyRedraw()
    elif command == "help":
        print(HELP)
    else:
        print("Invalid command!")
    return True


def waitForPending(scheduler: ClockScheduler):
    due = scheduler.nextDue()
    if due is None:
        return
    delay = due - scheduler.clock()
    if delay > 0:
        time.sleep(delay)
    scheduler.runDue()


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(description="Play Lucky Scratch in the terminal.")
    parser.add_argument("--cards", type=int, default=DEFAULT_ACTIVE_CARDS, help="Number of cards (clamped to 1-5).")
    parser.add_argument("--no-shuffle", action="store_true", help="Keep the cards in setup order.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the shuffle.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    setupLogging(args.log_level)
    scheduler = ClockScheduler()
    machine = RoundStateMachine(
        scheduler=scheduler,
        rng=random.Random(args.seed),
        activeCount=clampCardCount(args.cards),
        cardWidth=CARD_SIZE,
        cardHeight=CARD_SIZE,
    )
    machine.shuffleEnabled = not args.no_shuffle
    interface = CommandLineInterface()
    machine.registerInterface(interface)
    print(HELP)
    interface.notifyRedraw()
    interface.flush()
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        if not runCommand(machine, line):
            break
        interface.flush()
        waitForPending(scheduler)
        interface.flush()


if __name__ == '__main__':
    main()
