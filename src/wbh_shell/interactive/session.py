from typing import Optional


class SessionState:
    """
    Holds the state of an interactive wbh shell session.

    Created once when the REPL starts and discarded when it exits. The only
    piece of session data is the selected webhook URL; nothing is persisted.
    """

    def __init__(self):
        # The URL of the currently selected webhook, if any.
        self.handle: Optional[str] = None

        # A flag to control the main loop of the REPL.
        self.is_running: bool = True

    def get(self) -> Optional[str]:
        return self.handle

    def set(self, handle: str):
        self.handle = handle

    def clear(self):
        self.handle = None

    @property
    def has_resource(self) -> bool:
        return self.handle is not None
