class Interface:

    def __init__(self):
        self.machine = None

    def onStart(self):
        """
        Invoked when a round (re)starts with fresh cards.
        """
        self.notifyRedraw()

    def onEvent(self, event):
        """
        Invoked when a round event happens.
        :param event: a RoundEvent
        :return:
        """
        self.notifyRedraw()
        pass

    def onFinish(self, result):
        """
        Invoked once per round when the winning card is revealed.
        :param result: content of the winning card
        :return:
        """
        pass

    def onReset(self):
        self.notifyRedraw()

    def notifyRedraw(self):
        pass
