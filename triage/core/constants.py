"""
Constants
Centralised storage for field limits, sort keys and form options.
"""
TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 20
DESCRIPTION_MAX_LENGTH = 500
ERROR_MESSAGE_MIN_LENGTH = 10

DEFAULT_PRIORITY = "medium"
DEFAULT_STATUS = "open"

# "all" means "no constraint" for every exact-match filter
FILTER_ALL = "all"

DEFAULT_SORT_KEY = "date"

OS_OPTIONS = ["macOS", "Windows", "Linux"]
IDE_OPTIONS = ["VS Code", "Android Studio", "IntelliJ IDEA", "Vim/Emacs", "Other"]

ID_LENGTH = 12
