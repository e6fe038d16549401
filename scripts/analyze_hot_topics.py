#!/usr/bin/env python3

"""
Hot-topic product idea analysis - CI entry point.

Usage
-----
python scripts/analyze_hot_topics.py          # analyze the top 10 topics
python scripts/analyze_hot_topics.py top20    # analyze the top 20 topics

The script is intentionally thin and delegates to ``idea_engine.pipeline``
so the scheduled workflow and the ``hot-ideas`` console script share one
code path.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from idea_engine.pipeline import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
