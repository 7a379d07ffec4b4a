import unittest

from scratch.Card import CHECK_EVERY_MOVES, CardConfig, CardController, CardState, ContentKind


class RecordingListener:
    def __init__(self):
        self.started = []
        self.revealed = []

    def onCardScratchStarted(self, slot):
        self.started.append(slot)

    def onCardRevealed(self, slot, content):
        self.revealed.append((slot, content))


def wipe_rows(size, step):
    points = []
    y = step / 2
    forward = True
    while y < size:
        row = [(0, y), (size, y)] if forward else [(size, y), (0, y)]
        points.extend(row)
        forward = not forward
        y += step
    return points


class CardControllerTestCase(unittest.TestCase):
    def make_card(self, locked=None, revealed=False):
        listener = RecordingListener()
        config = CardConfig(1, ContentKind.TEXT, "Free Coffee")
        card = CardController("card-0", config, listener=listener, isLocked=locked,
                              width=100, height=100, brushRadius=10, revealed=revealed)
        return card, listener

    def test_start_signals_once(self):
        card, listener = self.make_card()
        self.assertEqual(CardState.IDLE, card.state)
        self.assertTrue(card.attemptStart())
        self.assertTrue(card.attemptStart())
        self.assertEqual(CardState.SCRATCHING, card.state)
        self.assertEqual(["card-0"], listener.started)

    def test_locked_card_rejects_gestures(self):
        card, listener = self.make_card(locked=lambda: True)
        self.assertFalse(card.gestureStart((50, 50)))
        self.assertFalse(card.gestureMove((60, 60)))
        self.assertFalse(card.gestureEnd())
        self.assertEqual(CardState.IDLE, card.state)
        self.assertEqual([], listener.started)
        self.assertEqual(1.0, card.mask.sampleOcclusionRatio())

    def test_small_scratch_does_not_reveal(self):
        card, listener = self.make_card()
        card.gestureStart((50, 50))
        card.gestureMove((55, 50))
        card.gestureEnd()
        self.assertEqual(CardState.SCRATCHING, card.state)
        self.assertEqual([], listener.revealed)

    def test_full_scratch_reveals_once_with_content(self):
        card, listener = self.make_card()
        points = wipe_rows(100, 10)
        card.gestureStart(points[0])
        for p in points[1:]:
            card.gestureMove(p)
        card.gestureEnd()
        self.assertEqual(CardState.REVEALED, card.state)
        self.assertEqual([("card-0", "Free Coffee")], listener.revealed)
        self.assertEqual(0.0, card.mask.sampleOcclusionRatio())
        # revealed cards take no further input
        self.assertFalse(card.gestureStart((10, 10)))
        self.assertFalse(card.checkRevealProgress())
        self.assertEqual(1, len(listener.revealed))

    def test_reveal_is_checked_during_drag(self):
        card, listener = self.make_card()
        card.gestureStart((0, 5))
        # wide brush so a handful of moves clear the card
        card.tracker.brushRadius = 40
        for i in range(CHECK_EVERY_MOVES):
            card.gestureMove((100 * ((i + 1) % 2), 20 * (i + 1)))
        self.assertEqual(CardState.REVEALED, card.state)
        self.assertEqual(1, len(listener.revealed))

    def test_check_on_gesture_end_is_unconditional(self):
        card, listener = self.make_card()
        card.gestureStart((0, 5))
        card.tracker.brushRadius = 40
        for p in [(100, 20), (0, 60)]:
            card.gestureMove(p)
        self.assertEqual(CardState.SCRATCHING, card.state)
        card.gestureEnd()
        self.assertEqual(CardState.REVEALED, card.state)
        self.assertEqual(1, len(listener.revealed))

    def test_locked_card_never_reveals(self):
        locked = [False]
        card, listener = self.make_card(locked=lambda: locked[0])
        card.gestureStart((0, 5))
        card.mask.forceClear()
        locked[0] = True
        card.gestureEnd()
        self.assertEqual([], listener.revealed)
        self.assertNotEqual(CardState.REVEALED, card.state)

    def test_force_reveal_skips_content_event(self):
        card, listener = self.make_card()
        self.assertTrue(card.forceReveal())
        self.assertFalse(card.forceReveal())
        self.assertEqual(CardState.REVEALED, card.state)
        self.assertEqual(0.0, card.mask.sampleOcclusionRatio())
        self.assertEqual([], listener.revealed)

    def test_force_reveal_works_while_locked(self):
        card, listener = self.make_card(locked=lambda: True)
        self.assertTrue(card.forceReveal())
        self.assertTrue(card.isRevealed())

    def test_card_bound_as_revealed_starts_cleared(self):
        card, _ = self.make_card(revealed=True)
        self.assertTrue(card.isRevealed())
        self.assertEqual(0.0, card.mask.sampleOcclusionRatio())

    def test_content_kind_parse(self):
        self.assertEqual(ContentKind.IMAGE, ContentKind.parse("Image"))
        self.assertEqual(ContentKind.TEXT, ContentKind.parse("video"))
        self.assertEqual(ContentKind.IMAGE, ContentKind.parse(ContentKind.IMAGE))


if __name__ == "__main__":
    unittest.main()
