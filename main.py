# main.py
#
# What this file is:
# The command-line (terminal) front end for activity scoring.
# It uses a simple menu and prints results to the console.
#
# Flow (Option 1):
#   activity file (JSON/CSV) -> scoring -> console summary -> JSON export
#
# Printing lives here; scoring.py and the scorer modules never print.

import json

import pandas as pd

from file_utils import (
    load_activity_map,
    load_paths,
    save_scores_json,
    save_scores_csv,
)
from scoring import activity_scores, trend_breakdown, consistency_breakdown

SNAPSHOT_KEYS = [
    "trend_score",
    "consistency_score",
    "active_days",
    "span_days",
    "first_day",
    "last_day",
]


def print_menu():
    """Print the menu options."""
    print("\nActivity Score Analyzer")
    print("----------------------------")
    print("1. Score an activity file (export JSON)")
    print("2. Score activity files listed in a text file (export CSV)")
    print("3. Score a JSON activity map typed at the prompt")
    print("4. Explain scores for an activity file")
    print("q. Quit")


def print_snapshot(snapshot):
    """Print one snapshot in a fixed key order."""
    print("\nSCORES")
    print("----------------------------")
    for k in SNAPSHOT_KEYS:
        print(f"{k:18} : {snapshot.get(k)}")


def print_breakdown(title, breakdown):
    """Print every intermediate value of a trend/consistency breakdown."""
    print(f"\n{title}")
    print("----------------------------")
    for k, v in breakdown.items():
        if isinstance(v, float):
            v = round(v, 4)
        print(f"{k:26} : {v}")


def name_from_path(path):
    """Subject name for reports: the file name without folders or extension."""
    base = path.replace("\\", "/").rsplit("/", 1)[-1]
    return base.rsplit(".", 1)[0] or "activity"


def score_file(path):
    """
    Load one activity file and score it.
    Returns (name, snapshot), or (name, None) if the file had no usable data.
    """
    name = name_from_path(path)
    activity = load_activity_map(path)
    if not activity:
        return name, None
    return name, activity_scores(activity)


def score_batch(paths):
    """
    Score many activity files.
    Returns a list of row dicts (name + snapshot keys), skipping empty files.
    """
    rows = []
    for path in paths:
        name, snapshot = score_file(path)
        if snapshot is None:
            print(f"Skipping {path}: no activity data.")
            continue
        row = {"name": name}
        row.update(snapshot)
        rows.append(row)
    return rows


def parse_activity_text(text):
    """
    Parse a JSON object typed by the user.
    Returns the dict, or None (after printing an error) if it isn't one.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        print(f"Error: not valid JSON: {e}")
        return None

    if not isinstance(data, dict):
        print("Error: expected a JSON object like {\"2024-01-01\": 3}.")
        return None

    return data


def analyze_one():
    path = input("Activity file (.json or .csv): ").strip()
    if path == "":
        print("A file path is required.")
        return

    name, snapshot = score_file(path)
    if snapshot is None:
        print("No activity data found.")
        return

    print_snapshot(snapshot)
    saved = save_scores_json(name, snapshot)
    print(f"\nSaved: {saved}")


def analyze_batch():
    list_path = input("Text file with one activity file per line: ").strip()
    paths = load_paths(list_path) if list_path else load_paths()
    if not paths:
        print("No activity files listed.")
        return

    rows = score_batch(paths)
    if not rows:
        print("None of the files had activity data.")
        return

    table = pd.DataFrame(rows).set_index("name")
    print("\nBATCH SCORES")
    print("----------------------------")
    print(table.to_string())

    saved = save_scores_csv(rows)
    print(f"\nSaved: {saved}")


def analyze_typed():
    text = input("Paste a JSON activity map: ").strip()
    activity = parse_activity_text(text)
    if activity is None:
        return
    print_snapshot(activity_scores(activity))


def explain_option():
    path = input("Activity file (.json or .csv): ").strip()
    if path == "":
        print("A file path is required.")
        return

    activity = load_activity_map(path)
    if not activity:
        print("No activity data found.")
        return

    print_breakdown("TREND", trend_breakdown(activity))
    print_breakdown("CONSISTENCY", consistency_breakdown(activity))


def main():
    """Menu loop: runs until the user enters "q"."""
    choice = ""
    while choice != "q":
        print_menu()
        choice = input("Choice: ").strip().lower()

        if choice == "1":
            analyze_one()
        elif choice == "2":
            analyze_batch()
        elif choice == "3":
            analyze_typed()
        elif choice == "4":
            explain_option()
        elif choice == "q":
            print("Goodbye!")
        else:
            print("Invalid option. Try again.")


if __name__ == "__main__":
    main()
