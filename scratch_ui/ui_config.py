from scratch.Mask import COATING_THEMES

SETUP = 1
PLAY = 2

CARD_SIZE = 200
CARD_GAP = 28
HEADER_HEIGHT = 84
STATUS_HEIGHT = 90
BUTTON_HEIGHT = 46
FPS_MS = 16

KIND_ORDER = ("text", "image")
COLOR_ORDER = tuple(COATING_THEMES)

PLACEHOLDER_TEXT = "Image Error"

PALETTE = {
    "bg_base": "#7c3aed",
    "panel": "#fdfcff",
    "panel_outline": "#e5e7eb",
    "title": "#4f46e5",
    "text": "#111827",
    "subtext": "#6b7280",
    "accent": "#4f46e5",
    "accent_text": "#ffffff",
    "button_disabled": "#a5b4fc",
    "prize_bg": "#ffffff",
    "card_border": "#e5e7eb",
    "winner_border": "#facc15",
    "locked_veil": "#9ca3af",
    "result": "#db2777",
}
