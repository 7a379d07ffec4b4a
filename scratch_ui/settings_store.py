import configparser
from pathlib import Path

from scratch.Card import DEFAULT_CONFIGS, CardConfig, ContentKind
from scratch.Round import DEFAULT_ACTIVE_CARDS, MAX_ACTIVE_CARDS, clampCardCount
from scratch_ui.ui_config import COLOR_ORDER, KIND_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "num_cards": str(DEFAULT_ACTIVE_CARDS),
    "shuffle": "true",
    "color": "indigo",
    "cards": [{"kind": c.contentKind.value, "content": c.content} for c in DEFAULT_CONFIGS],
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _card_section(idx):
    return f"card{idx + 1}"


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update(settings)

    data["num_cards"] = str(clampCardCount(data.get("num_cards")))

    raw_shuffle = str(data.get("shuffle", DEFAULT_SETTINGS["shuffle"])).strip().lower()
    if raw_shuffle in _TRUE:
        data["shuffle"] = "true"
    elif raw_shuffle in _FALSE:
        data["shuffle"] = "false"
    else:
        data["shuffle"] = DEFAULT_SETTINGS["shuffle"]

    if data["color"] not in COLOR_ORDER:
        data["color"] = DEFAULT_SETTINGS["color"]

    cards = []
    raw_cards = data.get("cards")
    if not isinstance(raw_cards, (list, tuple)):
        raw_cards = []
    for idx in range(MAX_ACTIVE_CARDS):
        fallback = DEFAULT_SETTINGS["cards"][idx]
        raw = raw_cards[idx] if idx < len(raw_cards) and isinstance(raw_cards[idx], dict) else fallback
        kind = str(raw.get("kind", fallback["kind"])).strip().lower()
        if kind not in KIND_ORDER:
            kind = fallback["kind"]
        content = raw.get("content")
        if content is None:
            content = fallback["content"]
        cards.append({"kind": kind, "content": str(content)})
    data["cards"] = cards
    return data


def load_settings():
    parser = configparser.ConfigParser(interpolation=None)
    if not SETTINGS_PATH.exists():
        return _sanitize({})
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except Exception:
        return _sanitize({})
    if "setup" not in parser:
        return _sanitize({})
    raw = {
        "num_cards": parser["setup"].get("num_cards", DEFAULT_SETTINGS["num_cards"]),
        "shuffle": parser["setup"].get("shuffle", DEFAULT_SETTINGS["shuffle"]),
        "color": parser["setup"].get("color", DEFAULT_SETTINGS["color"]),
    }
    cards = []
    for idx in range(MAX_ACTIVE_CARDS):
        section = _card_section(idx)
        if section not in parser:
            cards.append(DEFAULT_SETTINGS["cards"][idx])
            continue
        cards.append({
            "kind": parser[section].get("kind", ""),
            "content": parser[section].get("content"),
        })
    raw["cards"] = cards
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser(interpolation=None)
    parser["setup"] = {
        "num_cards": data["num_cards"],
        "shuffle": data["shuffle"],
        "color": data["color"],
    }
    for idx, card in enumerate(data["cards"]):
        parser[_card_section(idx)] = card
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)


def card_configs(settings):
    data = _sanitize(settings)
    return tuple(
        CardConfig(idx + 1, ContentKind.parse(card["kind"]), card["content"])
        for idx, card in enumerate(data["cards"])
    )


def shuffle_enabled(settings) -> bool:
    return _sanitize(settings)["shuffle"] == "true"
