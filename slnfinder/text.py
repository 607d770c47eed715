"""Centralized user-facing text for the slnfinder CLI."""

from __future__ import annotations


class Styles:
    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    INFO = "dim"
    ACCENT = "blue"
    TITLE = "bold cyan"
    TABLE_HEADER = "bold magenta"
    RULE = "grey50"


class Messages:
    APP_TITLE = ".NET Solution Finder"
    APP_HELP = "slnfinder – find Visual Studio solutions (.sln/.slnx) and open them."
    HELP_MASK = "Search mask for solution names (.sln/.slnx)."
    HELP_SEARCH = "Search cached solutions and open the selected one."
    HELP_REFRESH = "Force a full rebuild of the solution cache."
    HELP_CONFIG = "Configure or show the search root path."
    HELP_CONFIG_ROOT = "Root directory to search for solutions."
    HELP_CONFIG_CREATE = "Create the root directory when it does not exist (skip the prompt)."
    HELP_CONFIG_SCAN = "Scan the new root directory right away (skip the prompt)."
    HELP_SEARCH_FORMAT = "Output format: rich (interactive) or porcelain (paths only)."
    HELP_SEARCH_ACTION = "Action to run on the selected solution (skip the prompt)."
    HELP_SEARCH_RESCAN = "Force a full scan before searching."
    HELP_VERBOSE = "Show debug logging on stderr."

    ERROR_ROOT_MISSING = "Root path does not exist: {path}"
    ERROR_MASK_REQUIRED = "A search mask is required."
    ERROR_NO_SOLUTIONS = "No solution found."
    ERROR_OPEN_SOLUTION = "Failed to open the solution: {reason}"
    ERROR_OPEN_FOLDER = "Failed to open the folder: {reason}"
    ERROR_OPEN_TERMINAL = "Failed to open a terminal: {reason}"
    ERROR_CONFIG_READ = "Failed to read the configuration ({path})."
    ERROR_CONFIG_WRITE = "Failed to update the configuration: {reason}"
    ERROR_CREATE_DIRECTORY = "Failed to create the directory: {reason}"
    ERROR_NO_TERMINAL = "No terminal emulator found on PATH."
    ERROR_NO_OPENER = "No command available to open {path}."
    ERROR_INVALID_CHOICE = "Invalid choice '{value}'. Enter one of: {allowed}."

    INFO_SEARCHING_IN = "Searching in: {path}"
    INFO_SEARCHING_CACHE = "Searching the cache (scan of {date})..."
    INFO_FULL_SCAN = "Full scan in progress..."
    INFO_SCANNING = "Scanning..."
    INFO_CACHE_UPDATED = "Cache updated ({count} solutions found)"
    INFO_REFRESH_RUNNING = "Rebuilding the cache for: {path}"
    INFO_REFRESH_DONE = "Cache updated successfully!"
    INFO_REFRESH_COUNT = "- {count} solutions found"
    INFO_REFRESH_DATE = "- Scan date: {date}"
    INFO_SINGLE_MATCH = "Single solution found: {name}"
    INFO_MATCH_COUNT = "({count} solutions found)"
    INFO_CANCELLED = "Operation cancelled."
    INFO_SOLUTION_OPENED = "Solution opened: {name}"
    INFO_FOLDER_OPENED = "Folder opened: {path}"
    INFO_TERMINAL_OPENED = "Terminal opened in: {path}"
    INFO_CONFIG_CURRENT = "Current root path: {path}"
    INFO_CONFIG_UNSET = "No root path configured."
    INFO_CONFIG_MISSING = "No configuration file found."
    INFO_CONFIG_HINT = "To set a new root path: slnfinder config \"C:\\MyProjects\""
    INFO_DIRECTORY_CREATED = "Directory created: {path}"
    INFO_ROOT_CONFIGURED = "Root path configured: {path}"
    INFO_ROOT_UNCHANGED = "Root path unchanged: {path}"
    INFO_CACHE_CREATED = "Cache created with {count} solutions found"

    PROMPT_SELECT_SOLUTION = "Select a solution to open (0 to cancel)"
    PROMPT_SELECT_ACTION = "Action for {name}"
    PROMPT_ACTION_CHOICE = "Choose an action"
    PROMPT_CREATE_DIRECTORY = "The directory does not exist. Create it?"
    PROMPT_SCAN_NOW = "Scan this directory now?"

    ACTION_OPEN_SOLUTION = "Open the solution"
    ACTION_OPEN_FOLDER = "Open the folder in the file manager"
    ACTION_OPEN_TERMINAL = "Open a terminal"
    ACTION_CANCEL = "Cancel"

    TABLE_HEADER_INDEX = "#"
    TABLE_HEADER_NAME = "Solution"
    TABLE_HEADER_FOLDER = "Folder"
    CANCEL_OPTION = "── [Cancel] ──"
    DATE_FORMAT = "%d/%m/%Y %H:%M"
