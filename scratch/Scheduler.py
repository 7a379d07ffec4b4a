import heapq
import itertools
import time


class ScheduledTask:
    def __init__(self, dueAt, callback):
        self.dueAt = dueAt
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self) -> bool:
        if self.done or self.cancelled:
            return False
        self.cancelled = True
        return True

    def isPending(self):
        return not (self.done or self.cancelled)

    def fire(self):
        if not self.isPending():
            return False
        self.done = True
        self.callback()
        return True


class ClockScheduler:
    """
    Single threaded delayed callbacks. Nothing fires by itself: the owner of the event loop calls
    runDue() whenever it gets control back (after input, on a timer tick, ...).
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self.heap = []
        self.counter = itertools.count()

    def schedule(self, delayMs, callback) -> ScheduledTask:
        task = ScheduledTask(self.clock() + max(0, delayMs) / 1000.0, callback)
        heapq.heappush(self.heap, (task.dueAt, next(self.counter), task))
        return task

    def runDue(self):
        now = self.clock()
        fired = 0
        while self.heap and self.heap[0][0] <= now:
            (_, _, task) = heapq.heappop(self.heap)
            if task.fire():
                fired += 1
        return fired

    def pending(self):
        return [task for (_, _, task) in sorted(self.heap) if task.isPending()]

    def nextDue(self):
        tasks = self.pending()
        if not tasks:
            return None
        return tasks[0].dueAt
