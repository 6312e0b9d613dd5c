"""Selection state used to filter which loaded files are displayed."""

from __future__ import annotations

from core.types import FileID


class SelectionStore:
    """Insertion-ordered set of selected evaluation and profile ids."""

    def __init__(self) -> None:
        self._selected_evaluations: dict[FileID, None] = {}
        self._selected_profiles: dict[FileID, None] = {}

    def toggle_evaluation(self, file_id: FileID) -> bool:
        """Flip an evaluation's selection and return the new state."""
        return _toggle(self._selected_evaluations, file_id)

    def toggle_profile(self, file_id: FileID) -> bool:
        """Flip a profile's selection and return the new state."""
        return _toggle(self._selected_profiles, file_id)

    def select_evaluation(self, file_id: FileID) -> None:
        self._selected_evaluations[file_id] = None

    def select_profile(self, file_id: FileID) -> None:
        self._selected_profiles[file_id] = None

    def deselect(self, file_id: FileID) -> None:
        """Remove an id from both selections, ignoring unknown ids."""
        self._selected_evaluations.pop(file_id, None)
        self._selected_profiles.pop(file_id, None)

    def is_selected(self, file_id: FileID) -> bool:
        return file_id in self._selected_evaluations or file_id in self._selected_profiles

    @property
    def selected_evaluation_ids(self) -> tuple[FileID, ...]:
        return tuple(self._selected_evaluations)

    @property
    def selected_profile_ids(self) -> tuple[FileID, ...]:
        return tuple(self._selected_profiles)

    def clear(self) -> None:
        """Deselect everything."""
        self._selected_evaluations.clear()
        self._selected_profiles.clear()


def _toggle(selection: dict[FileID, None], file_id: FileID) -> bool:
    if file_id in selection:
        del selection[file_id]
        return False
    selection[file_id] = None
    return True
