"""File utilities shipped as an init.d module.

- count_files: count matching files in a directory
- rename_ext: bulk-rename file extensions
- check_cmds: verify required commands are on PATH
- unzip_multi: extract many ZIP archives into one merged directory
"""

from .archives import unzip_multi
from .commands import check_cmds
from .files import count_files, rename_ext

__all__ = ["check_cmds", "count_files", "rename_ext", "unzip_multi"]
