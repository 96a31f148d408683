"""Choice of the folder that holds device configuration files."""

from dataclasses import dataclass
from pathlib import Path

_CFG_SUFFIX = ".cfg"


def cfg_files_list(dir_path) -> list[str]:
    """Names of the ``.cfg`` files in a folder, without extension, sorted case-insensitively."""
    directory = Path(dir_path)
    if not directory.is_dir():
        return []
    names = [
        entry.name[: -len(_CFG_SUFFIX)]
        for entry in directory.iterdir()
        if entry.is_file()
        and not entry.name.startswith(".")
        and entry.name.lower().endswith(_CFG_SUFFIX)
    ]
    names.sort(key=str.lower)
    return names


@dataclass
class FolderSelection:
    """The currently selected configs folder."""

    folder_path: str = ""

    def set_folder_path(self, path) -> None:
        """Select a new folder; selecting the current one does nothing."""
        path = str(path)
        if path == self.folder_path:
            return
        self.folder_path = path

    @property
    def configs(self) -> list[str]:
        """Config names found in the selected folder."""
        return cfg_files_list(self.folder_path)