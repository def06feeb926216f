"""Write a demo conflict snapshot for trying out the renderer."""
import json
import math
import sys
from pathlib import Path

# ── Conflict data ──
CONFLICTS = [
    {"id": 1, "query": "kitchen remodeling", "severity": "high", "volatility": 0.62,
     "recommendation": "Consolidate content into main guide page",
     "pages": [
         ("/kitchen-remodel-guide", "Kitchen Remodel Guide", 4.1, 450, 9800),
         ("/kitchen-renovation-ideas", "Kitchen Renovation Ideas", 6.8, 320, 7400),
         ("/modern-kitchen-designs", "Modern Kitchen Designs", 9.5, 280, 5100),
     ]},
    {"id": 2, "query": "bathroom renovation", "severity": "medium", "volatility": 0.31,
     "recommendation": "Cross-link and differentiate content focus",
     "pages": [
         ("/bathroom-renovation", "Bathroom Renovation Tips", 3.2, 380, 6200),
         ("/small-bathroom-remodel", "Small Bathroom Remodel", 7.8, 290, 4100),
     ]},
    {"id": 3, "query": "home improvement", "severity": "critical", "volatility": 0.88,
     "recommendation": "Create pillar page structure with clear hierarchy",
     "pages": [
         ("/diy-home-improvement", "DIY Home Improvement", 5.5, 520, 12000),
         ("/home-improvement-guide", "Home Improvement Guide", 6.1, 410, 11200),
         ("/best-home-improvements", "Best Home Improvements", 8.9, 340, 8000),
         ("/home-renovation-tips", "Home Renovation Tips", 12.4, 280, 3900),
     ]},
]

WINDOW = 28


def _trend(base: float, phase: float, length: int = WINDOW) -> list[float]:
    return [round(max(1.0, base + 1.5 * math.sin(i / 4 + phase)), 1) for i in range(length)]


def build() -> list[dict]:
    out = []
    for c in CONFLICTS:
        total = sum(p[3] for p in c["pages"])
        pages = []
        for i, (url, title, pos, clicks, impressions) in enumerate(c["pages"]):
            pages.append({
                "url": url, "title": title, "position": pos,
                "clicks": clicks, "impressions": impressions,
                "ctr": round(clicks / impressions * 100, 2),
                "clickShare": round(clicks / total * 100, 1),
                # newest page has a short history
                "trend": _trend(pos, i) if i < 2 else _trend(pos, i, length=7 * i),
            })
        out.append({**c, "pages": pages})
    return out


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("demo_snapshot.json")
    path.write_text(json.dumps({"conflicts": build()}, indent=2))
    print(f"Wrote {path}")
