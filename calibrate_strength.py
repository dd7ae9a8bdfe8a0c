import json
import secrets
from collections import Counter, defaultdict
from pathlib import Path

from zxcvbn import zxcvbn

from passgen.generator import evaluate, generate

COUNT = 50

BASE = Path("results")

PRESETS = {
    # name: (length, options)
    "digits_4": (4, {"numbers": True}),
    "lower_8": (8, {"lower": True}),
    "alnum_12": (12, {"upper": True, "lower": True, "numbers": True}),
    "all_16": (16, {"upper": True, "lower": True, "numbers": True, "symbols": True}),
}

"""
zxcvbn scores range 0-4

0 # too guessable (guesses < 10^3)
1 # very guessable (guesses < 10^6)
2 # somewhat guessable (guesses < 10^8)
3 # safely unguessable (guesses < 10^10)
4 # very unguessable (guesses >= 10^10)
"""


def score(pw):
    return zxcvbn(pw)["score"]


def calibrate(presets=PRESETS, count=COUNT, rng=secrets):
    """For each preset, tally zxcvbn scores per entropy label."""
    table = {}
    for name, (length, options) in presets.items():
        scores = defaultdict(Counter)
        for _ in range(count):
            result = generate(length, options, rng=rng)
            label = evaluate(result.password, result.pool_size)
            scores[label][score(result.password)] += 1
        table[name] = {label: dict(counts) for label, counts in scores.items()}
    return table


def main():
    BASE.mkdir(exist_ok=True)
    table = calibrate()
    out = BASE / "strength_calibration.json"
    out.write_text(json.dumps(table, indent=2) + "\n")

    for name, labels in table.items():
        print(f"{name}: {labels}")
    print("Strength calibration completed")


if __name__ == "__main__":
    main()
