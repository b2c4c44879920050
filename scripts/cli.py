"""
CLI to run recorded blend-shape frames -> timeline JSON.
"""
from __future__ import annotations
import argparse, json, logging, os
from core.config import Settings
from core.pipeline import analyze_frames

def main(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--frames", required=True,
                   help="JSON file: list of frames (blend-shape mapping, category list, or null for no face)")
    p.add_argument("--out", default="output/timeline.json", help="Path to output JSON")
    p.add_argument("--fps", type=float, default=None, help="Frame rate used to timestamp entries")
    args = p.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    with open(args.frames, "r", encoding="utf-8") as f:
        frames = json.load(f)
    if not isinstance(frames, list):
        p.error("--frames must contain a JSON list")

    try:
        timeline = analyze_frames(frames, settings, fps=args.fps)
    except TypeError as e:
        p.error(f"--frames: {e}")
    result = {"timeline": [entry.model_dump(mode="json") for entry in timeline]}
    print(json.dumps(result, indent=2, ensure_ascii=False))

    # Also write to file
    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    print(f"Timeline written to {args.out}")
    return result

if __name__ == "__main__":
    main()
