from collections import deque


class MessageQueue:
    """FIFO of short messages for the player.

    The core only pushes; the front end decides when to pop the next one.
    """
    def __init__(self):
        self._messages = deque()

    def push(self, text):
        if text:
            self._messages.append(text)

    def pop(self):
        """Oldest pending message, or None when the queue is empty."""
        if not self._messages:
            return None
        return self._messages.popleft()

    def drain(self):
        messages = list(self._messages)
        self._messages.clear()
        return messages

    def peek_all(self):
        return list(self._messages)

    def __len__(self):
        return len(self._messages)
