from prompt_toolkit.history import InMemoryHistory


class UniqueInMemoryHistory(InMemoryHistory):
    """
    An in-memory history that never holds the same line twice.

    Re-entering a line moves it to the most recent position.
    """

    def append_string(self, string: str) -> None:
        # `_storage` (InMemoryHistory) and `_loaded_strings` (History) are the
        # backing lists in prompt-toolkit 3.0.x; pyproject pins >=3.0.43,<4.
        if string in self._storage:
            self._storage.remove(string)
        if string in self._loaded_strings:
            self._loaded_strings.remove(string)
        super().append_string(string)
