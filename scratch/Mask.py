import random

from PIL import Image, ImageDraw, ImageFont

OCCLUDED = 255
CLEARED = 0

BRUSH_RADIUS = 20
SAMPLE_STRIDE = 16  # one sample per 16 cells of the flattened bitmap
REVEAL_CLEAR_RATIO = 0.6

COATING_CAPTION = "SCRATCH ME"
COATING_DOTS = 50

COATING_THEMES = {
    "indigo": {"main": "#6366f1", "light": "#a5b4fc", "dark": "#4338ca"},
    "purple": {"main": "#a855f7", "light": "#d8b4fe", "dark": "#7e22ce"},
    "emerald": {"main": "#10b981", "light": "#6ee7b7", "dark": "#047857"},
    "amber": {"main": "#f59e0b", "light": "#fcd34d", "dark": "#b45309"},
    "rose": {"main": "#f43f5e", "light": "#fda4af", "dark": "#be123c"},
    "gray": {"main": "#9ca3af", "light": "#e5e7eb", "dark": "#4b5563"},
}
DEFAULT_THEME = "gray"


def hexToRgb(color: str):
    color = color.lstrip("#")
    return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))


def mix(c1, c2, t):
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(c1, c2))


def themeFor(colorTheme):
    return COATING_THEMES.get(colorTheme, COATING_THEMES[DEFAULT_THEME])


def drawCoating(width, height, colorTheme, scale=1.0):
    """
    Paints the cosmetic coating for a theme.
    The result depends only on the arguments, so two masks reset with the same theme look identical.
    """
    theme = themeFor(colorTheme)
    light = hexToRgb(theme["light"])
    main = hexToRgb(theme["main"])
    img = Image.new("RGB", (width, height), light)
    draw = ImageDraw.Draw(img)

    # light -> main -> light along the diagonal, one anti-diagonal line per step
    span = max(1, width + height - 2)
    for d in range(width + height - 1):
        t = d / span
        color = mix(light, main, t * 2) if t <= 0.5 else mix(main, light, (t - 0.5) * 2)
        draw.line([(d, 0), (d - (height - 1), height - 1)], fill=color)

    font = ImageFont.load_default()
    box = draw.textbbox((0, 0), COATING_CAPTION, font=font)
    tx = (width - (box[2] - box[0])) / 2
    ty = (height - (box[3] - box[1])) / 2
    draw.text((tx + 1, ty + 1), COATING_CAPTION, fill=hexToRgb(theme["dark"]), font=font)
    draw.text((tx, ty), COATING_CAPTION, fill=(255, 255, 255), font=font)

    rng = random.Random(colorTheme)
    dot = mix(main, (255, 255, 255), 0.3)
    for _ in range(COATING_DOTS):
        x = rng.random() * width
        y = rng.random() * height
        r = (rng.random() * 3 + 1) * scale
        draw.ellipse([x - r, y - r, x + r, y + r], fill=dot)
    return img


class OcclusionMask:
    """
    Alpha bitmap covering one card. 255 means the coating is still there, 0 means it was scratched off.

    All points passed in are in display pixels; the bitmap itself is allocated in device pixels
    (display size times the pixel ratio).
    """

    def __init__(self):
        self.width = 0
        self.height = 0
        self.pixelRatio = 1.0
        self.colorTheme = DEFAULT_THEME
        self.bitmap: Image.Image = None
        self.coating: Image.Image = None

    def initialize(self, widthPx, heightPx, pixelRatio=1.0, colorTheme=DEFAULT_THEME):
        self.width = widthPx
        self.height = heightPx
        self.pixelRatio = pixelRatio if pixelRatio and pixelRatio > 0 else 1.0
        size = self.pixelSize()
        self.bitmap = Image.new("L", size, OCCLUDED)
        self.reset(colorTheme)
        return self

    def pixelSize(self):
        w = max(1, int(round(self.width * self.pixelRatio)))
        h = max(1, int(round(self.height * self.pixelRatio)))
        return w, h

    def __scaled(self, point):
        return point[0] * self.pixelRatio, point[1] * self.pixelRatio

    def erase(self, fromPoint, toPoint, brushRadius=BRUSH_RADIUS):
        if brushRadius <= 0:
            return
        r = brushRadius * self.pixelRatio
        (x0, y0) = self.__scaled(fromPoint)
        (x1, y1) = self.__scaled(toPoint)
        draw = ImageDraw.Draw(self.bitmap)
        draw.ellipse([x0 - r, y0 - r, x0 + r, y0 + r], fill=CLEARED)
        if (x0, y0) == (x1, y1):
            return
        draw.line([(x0, y0), (x1, y1)], fill=CLEARED, width=max(1, int(round(2 * r))))
        draw.ellipse([x1 - r, y1 - r, x1 + r, y1 + r], fill=CLEARED)

    def sampleOcclusionRatio(self):
        samples = self.bitmap.tobytes()[::SAMPLE_STRIDE]
        if len(samples) == 0:
            return 0.0
        occluded = len(samples) - samples.count(CLEARED)
        return occluded / len(samples)

    def sampleClearedRatio(self):
        return 1.0 - self.sampleOcclusionRatio()

    def isRevealComplete(self, threshold=REVEAL_CLEAR_RATIO):
        return self.sampleClearedRatio() >= threshold

    def forceClear(self):
        self.bitmap.paste(CLEARED, (0, 0) + self.bitmap.size)

    def reset(self, colorTheme=DEFAULT_THEME):
        self.colorTheme = colorTheme if colorTheme in COATING_THEMES else DEFAULT_THEME
        self.bitmap.paste(OCCLUDED, (0, 0) + self.bitmap.size)
        (w, h) = self.bitmap.size
        self.coating = drawCoating(w, h, self.colorTheme, self.pixelRatio)

    def isCleared(self, point):
        (x, y) = self.__scaled(point)
        (w, h) = self.bitmap.size
        px = min(w - 1, max(0, int(x)))
        py = min(h - 1, max(0, int(y)))
        return self.bitmap.getpixel((px, py)) == CLEARED

    def coatingImage(self):
        img = self.coating.copy()
        img.putalpha(self.bitmap)
        return img
