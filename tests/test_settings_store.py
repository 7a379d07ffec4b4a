import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from scratch.Card import ContentKind
from scratch_ui import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                data = settings_store.load_settings()
        self.assertEqual("3", data["num_cards"])
        self.assertEqual("true", data["shuffle"])
        self.assertEqual("indigo", data["color"])
        self.assertEqual(5, len(data["cards"]))
        self.assertEqual("Better Luck Next Time!", data["cards"][0]["content"])

    def test_card_count_is_clamped(self):
        self.assertEqual("5", settings_store._sanitize({"num_cards": "7"})["num_cards"])
        self.assertEqual("1", settings_store._sanitize({"num_cards": "0"})["num_cards"])
        self.assertEqual("3", settings_store._sanitize({"num_cards": "lots"})["num_cards"])

    def test_invalid_values_fall_back(self):
        data = settings_store._sanitize({
            "shuffle": "maybe",
            "color": "neon",
            "cards": [{"kind": "video", "content": "Prize"}, "junk"],
        })
        self.assertEqual("true", data["shuffle"])
        self.assertEqual("indigo", data["color"])
        self.assertEqual({"kind": "text", "content": "Prize"}, data["cards"][0])
        self.assertEqual("Free Coffee ☕", data["cards"][1]["content"])

    def test_save_and_load_setup(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
                data["num_cards"] = "4"
                data["shuffle"] = "false"
                data["color"] = "rose"
                data["cards"][2] = {"kind": "image", "content": "prizes/car.png"}
                settings_store.save_settings(data)
                loaded = settings_store.load_settings()
            text = ini_path.read_text(encoding="utf-8")
        self.assertIn("[setup]", text)
        self.assertIn("num_cards = 4", text)
        self.assertEqual("4", loaded["num_cards"])
        self.assertEqual("false", loaded["shuffle"])
        self.assertEqual("rose", loaded["color"])
        self.assertEqual({"kind": "image", "content": "prizes/car.png"}, loaded["cards"][2])

    def test_corrupt_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text("this is not an ini file", encoding="utf-8")
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual("3", data["num_cards"])

    def test_card_configs_and_shuffle_flag(self):
        data = settings_store._sanitize({"shuffle": "off", "cards": [{"kind": "image", "content": "a.png"}]})
        configs = settings_store.card_configs(data)
        self.assertEqual(5, len(configs))
        self.assertEqual(ContentKind.IMAGE, configs[0].contentKind)
        self.assertEqual("a.png", configs[0].content)
        self.assertEqual([1, 2, 3, 4, 5], [c.id for c in configs])
        self.assertFalse(settings_store.shuffle_enabled(data))


if __name__ == "__main__":
    unittest.main()
