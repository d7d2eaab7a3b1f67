# Loaded by initd_common.initialize(); definitions land in the shared namespace.
from initd_module_utils import check_cmds, count_files, rename_ext, unzip_multi  # noqa: F401
