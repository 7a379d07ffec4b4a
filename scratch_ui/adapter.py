from scratch.Round import CardRevealed, OthersRevealed, RoundState, RoundStateMachine, ScratchStarted, Shuffled
from scratch_ui.view_model import AnimationEvent, CardView, RoundViewModel

IMAGE_HEADLINE = "A Prize!"


class RoundAdapter:
    """Bridges the round state machine to a renderer-friendly model."""

    @staticmethod
    def headline(state: RoundState):
        if state is None or state.winnerSlot is None:
            return None
        card = state.card(state.winnerSlot)
        if card is not None and card.config.isImage():
            return f"You found: {IMAGE_HEADLINE}"
        return f"You found: {state.result}"

    @staticmethod
    def snapshot(machine: RoundStateMachine) -> RoundViewModel:
        state = machine.state
        cards = ()
        if state is not None:
            cards = tuple(
                CardView(
                    slot=card.roundSlot,
                    kind=card.config.contentKind.value,
                    content=card.config.content,
                    revealed=card.revealed,
                    is_winner=card.isWinner,
                    locked=machine.isLocked(card.roundSlot),
                )
                for card in state.cards
            )
        return RoundViewModel(
            mode=machine.mode.value,
            phase=state.phase.value if state is not None else None,
            started_slot=state.startedSlot if state is not None else None,
            winner_slot=state.winnerSlot if state is not None else None,
            result=state.result if state is not None else None,
            headline=RoundAdapter.headline(state),
            can_shuffle=machine.canShuffle(),
            cards=cards,
        )

    @staticmethod
    def event_to_animation(event) -> AnimationEvent:
        if isinstance(event, ScratchStarted):
            return AnimationEvent(type="START", payload={"slot": event.slot})
        if isinstance(event, CardRevealed):
            return AnimationEvent(
                type="WIN",
                payload={"slot": event.slot, "content": event.content},
            )
        if isinstance(event, OthersRevealed):
            return AnimationEvent(type="REVEAL_ALL", payload={"slots": event.slots})
        if isinstance(event, Shuffled):
            return AnimationEvent(type="SHUFFLE", payload={"slots": event.slots})
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})
