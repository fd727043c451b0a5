#!/usr/bin/env python3
import os, re, csv

BASE = "results"
NUM = r"(-?[0-9]+(?:\.[0-9]+)?(?:e-?[0-9]+)?)"

HDR = ["run", "data", "arms", "steps", "epsilon", "learning_rate", "q0",
       "best_arm", "best_q", "best_share_pct"]


def parse_summary(path):
    m = {k: None for k in HDR}
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                s = line.strip()
                if s.startswith("Run:"):
                    m["run"] = s.split(":", 1)[1].strip()
                elif s.startswith("Data:"):
                    m["data"] = s.split(":", 1)[1].strip()
                elif s.startswith("Arms:"):
                    r = re.search(r"\d+", s)
                    if r: m["arms"] = int(r.group())
                elif s.startswith("Steps:"):
                    r = re.search(r"\d+", s)
                    if r: m["steps"] = int(r.group())
                elif s.startswith("Epsilon:"):
                    # "Epsilon: X | Learning Rate: Y | Q0: Z"  (Y may be "none")
                    r = re.search(r"Epsilon:\s*(\S+)\s*\|\s*Learning Rate:\s*(\S+)\s*\|\s*Q0:\s*(\S+)", s)
                    if r:
                        m["epsilon"] = float(r.group(1))
                        m["learning_rate"] = None if r.group(2) == "none" else float(r.group(2))
                        m["q0"] = float(r.group(3))
                elif s.startswith("Best Arm:"):
                    m["best_arm"] = s.split(":", 1)[1].strip()
                elif s.startswith("Best Q:"):
                    # "Best Q: X | Share: Y%"
                    vals = re.findall(NUM, s)
                    if len(vals) >= 2:
                        m["best_q"], m["best_share_pct"] = map(float, vals[:2])
    except FileNotFoundError:
        pass
    return m


def main(base=BASE):
    rows = []
    if not os.path.isdir(base):
        print(f"No {base}/ directory found.")
        return rows

    for d in sorted(os.listdir(base)):
        path = os.path.join(base, d, "summary.txt")
        if not os.path.isfile(path):  # skip plots/ and other non-run dirs
            continue
        s = parse_summary(path)
        if not s.get("run"):  # fallback to folder name
            s["run"] = d
        rows.append(s)

    print("\t".join(HDR))
    for r in rows:
        print("\t".join("" if r.get(k) is None else str(r[k]) for k in HDR))

    out_csv = os.path.join(base, "compare.csv")
    with open(out_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=HDR)
        w.writeheader()
        for r in rows:
            w.writerow(r)
    print(f"Wrote {out_csv}")
    return rows


if __name__ == "__main__":
    main()
