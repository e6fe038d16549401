#!/usr/bin/env python3
"""Console-script wrappers for the hot-topic idea pipeline.

After an editable install (``pip install -e .``) the following command becomes
available system-wide:

* ``hot-ideas [topN]``  – fetch the hot list, generate ideas, write the HTML report

The function below simply forwards to :mod:`idea_engine.pipeline` so there is
no business-logic duplication.
"""
from __future__ import annotations

import sys

from idea_engine.pipeline import main


def analyze() -> None:
    """Run the pipeline and propagate its exit status."""
    sys.exit(main(sys.argv[1:]))
