# SPDX-License-Identifier: MIT

# Rich color names used by the command line reports
COMPLETED_TASK_COLOR = "bright_black"
START_TIME_COLOR = "cyan"
END_TIME_COLOR = "magenta"
NOTES_COLOR = "medium_purple"
OVERDUE_COLOR = "red"
