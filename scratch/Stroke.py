from scratch.Mask import BRUSH_RADIUS, OcclusionMask


def asPoint(p):
    return float(p[0]), float(p[1])


class StrokeTracker:
    """
    Turns pointer samples into erase calls on a mask.

    Each move erases from the previous sample to the new one, so consecutive samples are always
    joined by exactly one capsule no matter how far apart they are.
    """

    def __init__(self, mask: OcclusionMask, brushRadius=BRUSH_RADIUS, guard=None, onCheck=None):
        self.mask = mask
        self.brushRadius = brushRadius
        self.guard = guard  # returns False while input has to be ignored
        self.onCheck = onCheck
        self.lastPos = None
        self.active = False
        self.points = []

    def accepting(self):
        return self.guard is None or self.guard()

    def onGestureStart(self, point):
        point = asPoint(point)
        self.active = True
        self.lastPos = point
        self.points = [point]
        self.mask.erase(point, point, self.brushRadius)

    def onGestureMove(self, point) -> bool:
        if not self.active or self.lastPos is None:
            return False
        if not self.accepting():
            return False
        point = asPoint(point)
        self.mask.erase(self.lastPos, point, self.brushRadius)
        self.lastPos = point
        self.points.append(point)
        return True

    def onGestureEnd(self) -> bool:
        if not self.active:
            return False
        self.active = False
        self.lastPos = None
        if self.onCheck is not None:
            self.onCheck()
        return True

    def cancel(self):
        self.active = False
        self.lastPos = None
