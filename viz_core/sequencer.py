from typing import Callable, List, Optional


class HighlightSequencer:
    """
    Steps through a list of nodes, decorating them one at a time and asking
    for a redraw after each step.

    Timing comes from ``schedule(delay_ms, callback)`` (``QTimer.singleShot``
    in the app). Every ``play`` or ``cancel`` bumps a generation token, and
    callbacks from an older generation return without touching anything, so
    a superseded sequence can never overwrite newer highlight state.
    """

    def __init__(
        self,
        schedule: Callable[[int, Callable[[], None]], None],
        clear: Callable[[], None],
        render: Callable[[], None],
        scale_duration: Callable[[int], int] = lambda ms: ms,
    ):
        self._schedule = schedule
        self._clear = clear
        self._render = render
        self._scale = scale_duration
        self._generation = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def cancel(self):
        self._generation += 1
        self._running = False

    def play(
        self,
        nodes: List,
        step_ms: int,
        pause_ms: int,
        cumulative: bool = False,
        found=None,
        on_finished: Optional[Callable[[], None]] = None,
    ) -> int:
        """
        Start a new sequence, cancelling any in flight.

        ``cumulative`` keeps every earlier node lit (search paths); otherwise
        only the current node is lit (traversals). ``found`` is marked
        ``found`` on the final step. Returns the generation token.
        """
        self.cancel()
        token = self._generation
        nodes = list(nodes)
        self._running = True

        def step(index):
            if token != self._generation:
                return
            if index >= len(nodes):
                self._schedule(self._scale(pause_ms), finish)
                return
            self._clear()
            lit = nodes[: index + 1] if cumulative else [nodes[index]]
            for node in lit:
                node.highlighted = True
            if found is not None and index == len(nodes) - 1:
                found.found = True
            self._render()
            self._schedule(self._scale(step_ms), lambda: step(index + 1))

        def finish():
            if token != self._generation:
                return
            self._clear()
            self._render()
            self._running = False
            if on_finished:
                on_finished()

        step(0)
        return token
