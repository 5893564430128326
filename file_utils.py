# file_utils.py
#
# Purpose:
# Read activity maps from disk and save score snapshots.
#
# Inputs:
#   - JSON: one object, {"2024-01-01": 3, "2024-01-02": 5, ...}
#   - CSV: a header row, then date,count rows (extra columns are ignored)
# Outputs (in REPORTS_DIR, timestamped so runs never overwrite each other):
#   - JSON snapshot for one subject
#   - CSV table for a batch of subjects
#
# JSON values are loaded as-is and cleaned up by the scoring engine. CSV
# rows are summed per date, since a flat file can list the same day twice.

import os                      # File paths + existence checks
import json                    # Read/write JSON files (built-in)
from datetime import datetime  # Timestamp for filenames

import pandas as pd

REPORTS_DIR = "reports"        # Folder to store all outputs


def ensure_reports_dir():
    """Create the reports folder if it doesn't exist."""
    os.makedirs(REPORTS_DIR, exist_ok=True)


def _timestamp():
    """Timestamp for filenames, e.g. 20260228_014512."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _load_json_map(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Error: could not read JSON from {path}: {e}")
        return {}

    if not isinstance(data, dict):
        print(f"Error: expected a JSON object of date -> count in {path}")
        return {}

    return data


def _load_csv_map(path):
    # dtype=str + keep_default_na=False: keep every cell exactly as written
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, ValueError) as e:
        print(f"Error: could not read CSV from {path}: {e}")
        return {}

    if df.shape[1] < 2:
        print(f"Error: expected at least two columns (date,count) in {path}")
        return {}

    dates = df.iloc[:, 0].str.strip()

    # Blank cells are "no contributions" (0); anything non-numeric becomes NaN,
    # which the scorers drop
    counts = pd.to_numeric(df.iloc[:, 1].str.strip().replace("", "0"), errors="coerce")

    # A date listed on several rows gets the sum of its counts
    totals = counts.groupby(dates).sum(min_count=1)

    return {date_key: float(total) for date_key, total in totals.items()}


def load_activity_map(path):
    """
    Load a "date -> count" activity map from a .json or .csv file.

    Returns {} (and prints an error) if the file is missing, unreadable,
    or not shaped like an activity map. Returning {} means "no data", which
    the scorers already handle.
    """
    if not os.path.exists(path):
        print(f"Error: file not found: {path}")
        return {}

    ext = os.path.splitext(path)[1].lower()

    if ext == ".json":
        return _load_json_map(path)
    if ext == ".csv":
        return _load_csv_map(path)

    print(f"Error: unsupported file type '{ext}' (use .json or .csv): {path}")
    return {}


def save_scores_json(name, snapshot):
    """
    Save one subject's score snapshot as JSON.
    Returns the saved file path.
    """
    ensure_reports_dir()

    ts = _timestamp()
    path = os.path.join(REPORTS_DIR, f"{name}_scores_{ts}.json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump({"name": name, "generated": ts, **snapshot}, f, indent=2)

    return path


def save_scores_csv(rows):
    """
    Save a batch of score rows (list of dicts) as CSV.
    Returns the saved file path.

    Each row is a snapshot from scoring.activity_scores() plus a "name" key.
    """
    ensure_reports_dir()

    ts = _timestamp()
    path = os.path.join(REPORTS_DIR, f"batch_scores_{ts}.csv")

    # An empty batch still creates an empty file
    if not rows:
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write("")
        return path

    # Column order follows the first row; a missing value is written as an empty cell
    pd.DataFrame(rows).to_csv(path, index=False)

    return path


def load_paths(path="activity_files.txt"):
    """
    Load activity file paths from a text file (one per line).
    Blank lines and "#" comment lines are skipped.
    """
    if not os.path.exists(path):
        print(f"Error: file not found: {path}")
        return []

    paths = []

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            p = line.strip()
            if p == "" or p.startswith("#"):
                continue
            paths.append(p)

    return paths
