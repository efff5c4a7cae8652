#This file is for development purposes only

import logging
import sys

from jira_rest_client import get_client


def main():
    logging.basicConfig(level=logging.INFO)
    client = get_client(interactive=True)

    print("\nFetching projects...")
    try:
        for project in client.get_projects():
            print(f"- {project.key}: {project}")
    except Exception as e:
        print(f"Error connecting to Jira: {e}")

    issue_key = sys.argv[1] if len(sys.argv) > 1 else "OPS-20"
    try:
        history = client.get_full_changelog(issue_key)
        if history is None:
            print(f"No change log returned for {issue_key}")
        else:
            for record in client.filter_change_log(history, "status"):
                for change in record.changes:
                    print(f"- {record.created} {record.user}: {change.from_string} -> {change.to_string}")
    except Exception as e:
        print(f"Error connecting to Jira: {e}")

if __name__ == "__main__":
    main()
