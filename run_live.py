# run_live.py
import json
import logging
import os
import sys

# Lambda code is loaded from its own directory, the same way the runtime does
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "lambdas", "notify_user_created"))

from app import handler  # noqa: E402
from cli.invoke_notifier import create_user_event  # noqa: E402


def run_live(user_name: str):
    """Executes the notifier handler locally using your live AWS credentials."""
    print("--- Starting LIVE Run of notify_user_created Lambda ---")

    event = create_user_event(user_name)
    try:
        print("\n--- Invoking Lambda handler (this will call IAM, SSM and Secrets Manager) ---")
        result = handler(event, {})
        print("--- Lambda handler execution finished ---")
    except Exception as e:
        print(f"\n An unexpected error occurred during the run: {e}")
        return

    print("\n--- Final Output from Lambda: ---")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    # Locally there is no Lambda runtime to attach a log handler
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    run_live(sys.argv[1] if len(sys.argv) > 1 else "s3-user")
