"""This module serves as the entry point for the scaffolder_actions application.

It imports the main function from the scaffolder_actions.cli module and
executes it when the script is run as the main module.
"""

from scaffolder_actions.cli import main

if __name__ == "__main__":
    main()
