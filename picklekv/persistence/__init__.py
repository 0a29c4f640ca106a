# ==============================================
# PERSISTENCE: when and how the DB reaches disk
# ==============================================
#
# Modules:
# --------
# - dump_policy.py → DumpMode, DumpPolicy, DumpScheduler
# - db_file.py     → DbFile (save/load the whole DB file)
#
# ==============================================

from .db_file import DbFile
from .dump_policy import DumpMode, DumpPolicy, DumpScheduler

__all__ = ["DbFile", "DumpMode", "DumpPolicy", "DumpScheduler"]
