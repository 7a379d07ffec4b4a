import logging
from tkinter import BOTH, Canvas, Tk, simpledialog

from PIL import Image, ImageTk

from scratch.Interface import Interface
from scratch.Round import MAX_ACTIVE_CARDS, MIN_ACTIVE_CARDS, OthersRevealed, RoundStateMachine, clampCardCount
from scratch.Scheduler import ClockScheduler
from scratch_ui.adapter import RoundAdapter
from scratch_ui.card_face import CardFaceRenderer, load_prize_image
from scratch_ui.settings_store import card_configs, load_settings, save_settings, shuffle_enabled
from scratch_ui.ui_config import (
    BUTTON_HEIGHT,
    CARD_GAP,
    CARD_SIZE,
    COLOR_ORDER,
    FPS_MS,
    HEADER_HEIGHT,
    KIND_ORDER,
    PALETTE,
    PLAY,
    SETUP,
    STATUS_HEIGHT,
)

logger = logging.getLogger("luckyscratch.ui")


class ScratchTkInterface(Interface):
    def __init__(self, width=1000, height=700, scheduler=None, rng=None):
        super().__init__()
        self.width = width
        self.height = height
        self.root = None
        self.canvas = None
        self.stage = SETUP

        self.settings = load_settings()
        self.scheduler = scheduler if scheduler is not None else ClockScheduler()
        machine = RoundStateMachine(
            scheduler=self.scheduler,
            rng=rng,
            activeCount=self.settings["num_cards"],
            cardWidth=CARD_SIZE,
            cardHeight=CARD_SIZE,
            colorTheme=self.settings["color"],
        )
        machine.registerInterface(self)

        self.vm = None
        self.message = ""
        self.active_buttons = []
        self.card_rects = {}
        self.dragging_slot = None
        self.prize_images = {}
        self.runtime_tk_images = []
        self.needs_redraw = True

    def run(self):
        self.root = Tk()
        self.root.title("Lucky Scratch")
        self.root.resizable(True, True)
        self.canvas = Canvas(self.root, width=self.width, height=self.height, highlightthickness=0, bd=0)
        self.canvas.pack(expand=1, fill=BOTH)

        self.root.bind("<Configure>", self.on_resize)
        self.root.bind("<Button-1>", self.on_press)
        self.root.bind("<B1-Motion>", self.on_drag)
        self.root.bind("<ButtonRelease-1>", self.on_release)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        self.tick()
        self.root.mainloop()

    def persist_settings(self):
        try:
            save_settings(self.settings)
        except OSError:
            logger.warning("could not save settings", exc_info=True)

    def on_close(self):
        self.persist_settings()
        self.root.destroy()

    def on_resize(self, event):
        if event.widget != self.root:
            return
        self.width = event.width
        self.height = event.height
        self.request_redraw()

    def request_redraw(self):
        self.needs_redraw = True

    # round control

    def start_round(self):
        machine = self.machine
        machine.colorTheme = self.settings["color"]
        machine.setActiveCount(self.settings["num_cards"])
        machine.start(card_configs(self.settings), shuffle_enabled(self.settings))
        self.persist_settings()

    def back_to_setup(self):
        self.dragging_slot = None
        self.machine.resetToSetup()

    def change_count(self, delta):
        count = clampCardCount(int(self.settings["num_cards"]) + delta)
        self.settings["num_cards"] = str(count)
        self.machine.setActiveCount(count)

    def toggle_shuffle(self):
        self.settings["shuffle"] = "false" if shuffle_enabled(self.settings) else "true"

    def cycle_color(self):
        idx = COLOR_ORDER.index(self.settings["color"]) if self.settings["color"] in COLOR_ORDER else 0
        self.settings["color"] = COLOR_ORDER[(idx + 1) % len(COLOR_ORDER)]

    def toggle_kind(self, idx):
        card = self.settings["cards"][idx]
        card["kind"] = KIND_ORDER[(KIND_ORDER.index(card["kind"]) + 1) % len(KIND_ORDER)]

    def edit_content(self, idx):
        card = self.settings["cards"][idx]
        prompt = "Image file path:" if card["kind"] == "image" else "Prize text:"
        value = simpledialog.askstring(f"Card {idx + 1}", prompt, initialvalue=card["content"], parent=self.root)
        if value is not None:
            card["content"] = value

    # Interface callbacks

    def onStart(self):
        self.stage = PLAY
        self.dragging_slot = None
        self.message = ""
        self.request_redraw()

    def onEvent(self, event):
        if isinstance(event, OthersRevealed):
            self.message = "Play again or edit the cards."
        self.request_redraw()

    def onFinish(self, result):
        self.dragging_slot = None
        self.request_redraw()

    def onReset(self):
        self.stage = SETUP
        self.request_redraw()

    def notifyRedraw(self):
        self.request_redraw()

    # input

    def find_card(self, x, y):
        for slot, (cx, cy, w, h) in self.card_rects.items():
            if cx <= x <= cx + w and cy <= y <= cy + h:
                return slot, (x - cx, y - cy)
        return None

    def on_press(self, event):
        for button in self.active_buttons:
            x1, y1, x2, y2 = button["rect"]
            if x1 <= event.x <= x2 and y1 <= event.y <= y2:
                if button.get("enabled", True):
                    self.on_button(button["action"])
                    self.request_redraw()
                return
        if self.stage != PLAY:
            return
        hit = self.find_card(event.x, event.y)
        if hit is None:
            return
        slot, local = hit
        if self.machine.pressCard(slot, local):
            self.dragging_slot = slot

    def on_drag(self, event):
        if self.stage != PLAY or self.dragging_slot is None:
            return
        slot = self.dragging_slot
        hit = self.find_card(event.x, event.y)
        if hit is None or hit[0] != slot:
            # leaving the card ends the stroke
            self.dragging_slot = None
            self.machine.releaseCard(slot)
            return
        self.machine.dragCard(slot, hit[1])

    def on_release(self, event):
        if self.dragging_slot is None:
            return
        slot = self.dragging_slot
        self.dragging_slot = None
        self.machine.releaseCard(slot)

    def on_button(self, action):
        if action == "start":
            self.start_round()
        elif action == "count_down":
            self.change_count(-1)
        elif action == "count_up":
            self.change_count(1)
        elif action == "shuffle_toggle":
            self.toggle_shuffle()
        elif action == "color":
            self.cycle_color()
        elif action.startswith("kind:"):
            self.toggle_kind(int(action.split(":")[1]))
        elif action.startswith("content:"):
            self.edit_content(int(action.split(":")[1]))
        elif action == "shuffle":
            self.machine.shuffle()
        elif action == "replay":
            self.machine.replay()
        elif action == "edit":
            self.back_to_setup()

    def tick(self):
        self.scheduler.runDue()
        if self.needs_redraw:
            self.draw()
            self.needs_redraw = False
        self.root.after(FPS_MS, self.tick)

    # drawing

    def card_positions(self, count):
        total = count * CARD_SIZE + (count - 1) * CARD_GAP
        x = (self.width - total) / 2
        y = HEADER_HEIGHT + STATUS_HEIGHT + 20
        return [(x + i * (CARD_SIZE + CARD_GAP), y) for i in range(count)]

    def prize_image(self, locator):
        if locator not in self.prize_images:
            self.prize_images[locator] = load_prize_image(locator, CARD_SIZE - 32, CARD_SIZE - 32)
        return self.prize_images[locator]

    def tk_image(self, img):
        photo = ImageTk.PhotoImage(img)
        self.runtime_tk_images.append(photo)
        return photo

    def draw(self):
        if self.canvas is None:
            return
        c = self.canvas
        c.delete("all")
        self.runtime_tk_images = []
        self.active_buttons = []
        self.card_rects = {}
        c.create_rectangle(0, 0, self.width, self.height, fill=PALETTE["bg_base"], width=0)
        c.create_rectangle(24, 16, self.width - 24, self.height - 16, fill=PALETTE["panel"], outline=PALETTE["panel_outline"])
        c.create_text(56, 56, anchor="w", text="Lucky Scratch", fill=PALETTE["title"], font="Helvetica 24 bold")
        if self.stage == SETUP:
            self.draw_setup(c)
        else:
            self.draw_play(c)

    def draw_button(self, c, label, action, x1, y1, w, enabled=True, fill=None):
        x2 = x1 + w
        y2 = y1 + BUTTON_HEIGHT
        self.active_buttons.append({"action": action, "rect": (x1, y1, x2, y2), "enabled": enabled})
        button_fill = (fill or PALETTE["accent"]) if enabled else PALETTE["button_disabled"]
        c.create_rectangle(x1, y1, x2, y2, fill=button_fill, outline="")
        c.create_text((x1 + x2) / 2, (y1 + y2) / 2, text=label, fill=PALETTE["accent_text"], font="Helvetica 13 bold")

    def draw_setup(self, c):
        count = int(self.settings["num_cards"])
        c.create_text(56, 110, anchor="w", text="Setup Your Scratch Cards", fill=PALETTE["text"], font="Helvetica 18 bold")
        c.create_text(56, 136, anchor="w", text="Configure prizes and settings.", fill=PALETTE["subtext"], font="Helvetica 12")

        y = 160
        self.draw_button(c, "-", "count_down", 56, y, 46, enabled=count > MIN_ACTIVE_CARDS)
        c.create_text(130, y + BUTTON_HEIGHT / 2, text=f"Count: {count}", fill=PALETTE["text"], font="Helvetica 13 bold")
        self.draw_button(c, "+", "count_up", 160, y, 46, enabled=count < MAX_ACTIVE_CARDS)
        shuffle_label = "Shuffle Cards: on" if shuffle_enabled(self.settings) else "Shuffle Cards: off"
        self.draw_button(c, shuffle_label, "shuffle_toggle", 230, y, 190)
        self.draw_button(c, f"Coating: {self.settings['color']}", "color", 440, y, 190)

        y += BUTTON_HEIGHT + 24
        for idx in range(count):
            card = self.settings["cards"][idx]
            row_y = y + idx * (BUTTON_HEIGHT + 12)
            c.create_text(56, row_y + BUTTON_HEIGHT / 2, anchor="w", text=str(idx + 1), fill=PALETTE["title"], font="Helvetica 14 bold")
            self.draw_button(c, card["kind"].capitalize(), f"kind:{idx}", 84, row_y, 90, fill=PALETTE["title"])
            content = card["content"] or ("Paste image path..." if card["kind"] == "image" else "Enter prize text...")
            if len(content) > 60:
                content = content[:57] + "..."
            self.draw_button(c, content, f"content:{idx}", 190, row_y, max(200, self.width - 270), fill="#64748b")

        self.draw_button(c, "Start Game", "start", self.width / 2 - 110, self.height - 90, 220)

    def draw_play(self, c):
        machine = self.machine
        self.vm = RoundAdapter.snapshot(machine)
        vm = self.vm
        self.draw_button(c, "Edit Cards", "edit", self.width - 190, 32, 140, fill="#64748b")

        status_y = HEADER_HEIGHT + STATUS_HEIGHT / 2
        if vm.phase == "finished":
            c.create_text(self.width / 2, status_y - 18, text="RESULT", fill=PALETTE["subtext"], font="Helvetica 11 bold")
            c.create_text(self.width / 2, status_y + 10, text=vm.headline, fill=PALETTE["result"], font="Helvetica 22 bold")
        else:
            hint = "Finish scratching this card!" if vm.started_slot else "Find the hidden prize"
            c.create_text(self.width / 2, status_y - 14, text="Pick a card to scratch!", fill=PALETTE["accent"], font="Helvetica 18 bold")
            c.create_text(
                self.width / 2,
                status_y + 14,
                text=f"Use your mouse to scratch the card! {hint}",
                fill=PALETTE["subtext"],
                font="Helvetica 12",
            )

        renderer = CardFaceRenderer()
        positions = self.card_positions(len(vm.cards))
        for view, (x, y) in zip(vm.cards, positions):
            self.card_rects[view.slot] = (x, y, CARD_SIZE, CARD_SIZE)
            card = machine.cardAt(view.slot)
            coating = card.mask.coatingImage()
            if coating.size != (CARD_SIZE, CARD_SIZE):
                coating = coating.resize((CARD_SIZE, CARD_SIZE), Image.BILINEAR)
            prize = self.tk_image(self.prize_image(view.content)) if view.kind == "image" else None
            renderer.draw_card(c, x, y, CARD_SIZE, CARD_SIZE, view, self.tk_image(coating), prize)

        buttons_y = self.height - 90
        if vm.phase == "finished":
            self.draw_button(c, "Play Again", "replay", self.width / 2 - 90, buttons_y, 180)
        else:
            self.draw_button(c, "Shuffle", "shuffle", self.width / 2 - 160, buttons_y, 150, enabled=vm.can_shuffle)
            self.draw_button(c, "Reset", "replay", self.width / 2 + 10, buttons_y, 150, fill="#64748b")
        if self.message:
            c.create_text(self.width / 2, buttons_y - 24, text=self.message, fill=PALETTE["subtext"], font="Helvetica 12")
