class AppState:
    """Process-wide flags set once by the CLI entry point."""

    def __init__(self):
        self.verbose_mode: bool = False


APP_STATE = AppState()
