import tempfile
import unittest
from pathlib import Path

from PIL import Image

from scratch_ui.card_face import CardFaceRenderer, load_prize_image, placeholder_image
from scratch_ui.view_model import CardView


class RecordingCanvas:
    def __init__(self):
        self.calls = []

    def create_rectangle(self, *args, **kwargs):
        self.calls.append(("rect", args, kwargs))

    def create_text(self, *args, **kwargs):
        self.calls.append(("text", args, kwargs))

    def create_image(self, *args, **kwargs):
        self.calls.append(("image", args, kwargs))


def view(**overrides):
    data = dict(slot="card-0", kind="text", content="Free Coffee", revealed=False, is_winner=False, locked=False)
    data.update(overrides)
    return CardView(**data)


class CardFaceTestCase(unittest.TestCase):
    def test_missing_image_gives_placeholder(self):
        img = load_prize_image("/definitely/not/here.png", 120, 80)
        self.assertEqual((120, 80), img.size)
        self.assertEqual(placeholder_image(120, 80).tobytes(), img.tobytes())

    def test_image_is_fitted_into_the_card(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "prize.png"
            Image.new("RGB", (400, 200), "red").save(path)
            img = load_prize_image(str(path), 100, 100)
        self.assertEqual((100, 50), img.size)
        self.assertEqual("RGBA", img.mode)

    def test_draw_covered_card(self):
        canvas = RecordingCanvas()
        CardFaceRenderer().draw_card(canvas, 0, 0, 200, 200, view(), coating_image="coating")
        kinds = [c[0] for c in canvas.calls]
        self.assertEqual(["rect", "text", "image"], kinds)
        self.assertEqual("Free Coffee", canvas.calls[1][2]["text"])

    def test_draw_locked_and_winner_cards(self):
        canvas = RecordingCanvas()
        CardFaceRenderer().draw_card(canvas, 0, 0, 200, 200, view(locked=True), coating_image="coating")
        self.assertEqual("gray50", canvas.calls[-1][2].get("stipple"))

        canvas = RecordingCanvas()
        CardFaceRenderer().draw_card(canvas, 0, 0, 200, 200, view(revealed=True, is_winner=True), coating_image="coating")
        self.assertNotIn("image", [c[0] for c in canvas.calls])
        self.assertEqual(5, canvas.calls[0][2]["width"])


if __name__ == "__main__":
    unittest.main()
