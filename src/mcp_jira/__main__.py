"""Entry point for ``python -m mcp_jira``."""

from mcp_jira import main

if __name__ == "__main__":
    main()
