from pathlib import Path

from PIL import Image, ImageDraw, ImageFont, ImageOps

from scratch_ui.ui_config import PALETTE, PLACEHOLDER_TEXT
from scratch_ui.view_model import CardView


def placeholder_image(width, height):
    img = Image.new("RGBA", (max(1, width), max(1, height)), "#e5e7eb")
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()
    box = draw.textbbox((0, 0), PLACEHOLDER_TEXT, font=font)
    x = (img.width - (box[2] - box[0])) / 2
    y = (img.height - (box[3] - box[1])) / 2
    draw.text((x, y), PLACEHOLDER_TEXT, fill="#6b7280", font=font)
    return img


def load_prize_image(locator, width, height):
    """Opens a local image for an image prize, or returns the placeholder when it can't be read."""
    try:
        path = Path(str(locator)).expanduser()
        with Image.open(path) as src:
            img = src.convert("RGBA")
    except Exception:
        return placeholder_image(width, height)
    return ImageOps.contain(img, (max(1, width), max(1, height)))


class CardFaceRenderer:
    def draw_card(self, canvas, x, y, w, h, view: CardView, coating_image=None, prize_image=None, font_scale=1.0):
        def fs(base):
            return max(8, int(base * font_scale))

        border = PALETTE["winner_border"] if view.is_winner else PALETTE["card_border"]
        width = 5 if view.is_winner else 3
        canvas.create_rectangle(x, y, x + w, y + h, fill=PALETTE["prize_bg"], outline=border, width=width)

        if view.kind == "image":
            if prize_image is not None:
                canvas.create_image(x + w / 2, y + h / 2, image=prize_image)
        else:
            if view.is_winner:
                canvas.create_text(x + w / 2, y + h * 0.25, text="✦", fill=PALETTE["winner_border"], font=f"Helvetica {fs(22)} bold")
            canvas.create_text(
                x + w / 2,
                y + h / 2,
                text=view.content,
                width=w - 24,
                justify="center",
                fill=PALETTE["text"],
                font=f"Helvetica {fs(16)} bold",
            )

        if coating_image is not None and not view.revealed:
            canvas.create_image(x, y, anchor="nw", image=coating_image)

        if view.locked and not view.revealed:
            canvas.create_rectangle(x, y, x + w, y + h, fill=PALETTE["locked_veil"], outline="", stipple="gray50")
