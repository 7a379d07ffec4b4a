import random
import unittest

from scratch.Card import CardConfig, ContentKind
from scratch.Round import CardRevealed, OthersRevealed, RoundStateMachine, ScratchStarted, Shuffled
from scratch.Scheduler import ClockScheduler
from scratch_ui.adapter import RoundAdapter


def make_machine():
    machine = RoundStateMachine(scheduler=ClockScheduler(lambda: 0.0), rng=random.Random(3),
                                activeCount=2, cardWidth=40, cardHeight=40)
    configs = [
        CardConfig(1, ContentKind.TEXT, "Free Coffee"),
        CardConfig(2, ContentKind.IMAGE, "/tmp/prize.png"),
    ]
    machine.start(configs, shuffle=False)
    return machine


class RoundAdapterTestCase(unittest.TestCase):
    def test_snapshot_setup_mode(self):
        machine = RoundStateMachine()
        vm = RoundAdapter.snapshot(machine)
        self.assertEqual("editor", vm.mode)
        self.assertIsNone(vm.phase)
        self.assertEqual((), vm.cards)
        self.assertFalse(vm.can_shuffle)

    def test_snapshot_playing_round(self):
        machine = make_machine()
        first = machine.state.cards[0].roundSlot
        machine.pressCard(first, (5, 5))
        vm = RoundAdapter.snapshot(machine)
        self.assertEqual("play", vm.mode)
        self.assertEqual("playing", vm.phase)
        self.assertEqual(first, vm.started_slot)
        self.assertFalse(vm.can_shuffle)
        self.assertEqual(["text", "image"], [c.kind for c in vm.cards])
        self.assertEqual([False, True], [c.locked for c in vm.cards])
        self.assertIsNone(vm.headline)

    def test_headline_for_text_and_image_prizes(self):
        machine = make_machine()
        text_slot, image_slot = machine.state.slots()
        machine.onCardRevealed(image_slot, "/tmp/prize.png")
        vm = RoundAdapter.snapshot(machine)
        self.assertEqual("finished", vm.phase)
        self.assertEqual("You found: A Prize!", vm.headline)
        self.assertEqual([False, True], [c.is_winner for c in vm.cards])

        machine.replay()
        machine.onCardRevealed(machine.state.slots()[0], "Free Coffee")
        self.assertEqual("You found: Free Coffee", RoundAdapter.snapshot(machine).headline)

    def test_event_mapping(self):
        start_evt = RoundAdapter.event_to_animation(ScratchStarted("card-1"))
        win_evt = RoundAdapter.event_to_animation(CardRevealed("card-1", "Free Coffee"))
        all_evt = RoundAdapter.event_to_animation(OthersRevealed(["card-0", "card-2"]))
        shuffle_evt = RoundAdapter.event_to_animation(Shuffled(["card-3"]))
        other_evt = RoundAdapter.event_to_animation(object())

        self.assertEqual("START", start_evt.type)
        self.assertEqual("WIN", win_evt.type)
        self.assertEqual("Free Coffee", win_evt.payload["content"])
        self.assertEqual("REVEAL_ALL", all_evt.type)
        self.assertEqual(("card-0", "card-2"), all_evt.payload["slots"])
        self.assertEqual("SHUFFLE", shuffle_evt.type)
        self.assertEqual("UNKNOWN", other_evt.type)


if __name__ == "__main__":
    unittest.main()
