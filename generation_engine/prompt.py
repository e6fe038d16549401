"""Prompt construction for the idea generator."""
from __future__ import annotations

from typing import Sequence

from .models import SCORE_MAXIMA, TopicRecord

_SCORE_EXAMPLE = {
    "innovation": 25,
    "topicality": 22,
    "fun": 20,
    "practicality": 8,
    "feasibility": 9,
}


def format_topic_list(topics: Sequence[TopicRecord]) -> str:
    """Render topics as a numbered list, one ``N. name (popularity: X)`` per line."""
    return "\n".join(
        f"{i}. {topic.name} (popularity: {topic.popularity})" for i, topic in enumerate(topics, 1)
    )


def build_prompt(topics: Sequence[TopicRecord]) -> str:
    """Return the full instruction prompt embedding *topics*."""
    example_scores = ",\n".join(f'    "{key}": {value}' for key, value in _SCORE_EXAMPLE.items())
    example_total = sum(_SCORE_EXAMPLE.values())

    return f"""You are a product-idea analyst. Analyze the following trending topics from the Weibo hot-search list and invent one product idea for each topic.

## Trending topics
{format_topic_list(topics)}

## What to do

For each topic:

1. **Understand the context**: infer from the title what happened, why it is trending and what the public cares about.

2. **Invent a product idea** with:
   - a product name (wrapped in 「」, make it catchy)
   - the core function (a 50-100 word description)
   - the target users (age, occupation, traits)
   - an event timeline (3-4 bullet points)

3. **Score it** (100 points in total):
   - innovation (0-{SCORE_MAXIMA["innovation"]}): are there similar products on the market?
   - topicality (0-{SCORE_MAXIMA["topicality"]}): will it spark discussion and sharing?
   - fun (0-{SCORE_MAXIMA["fun"]}): is the user experience enjoyable?
   - practicality (0-{SCORE_MAXIMA["practicality"]}): does it meet a real need?
   - feasibility (0-{SCORE_MAXIMA["feasibility"]}): is it technically and commercially viable?

Write the descriptive fields in the same language as the topic titles.

## Output format

Return a JSON array; every element looks like:
```json
{{
  "hotTopic": "the trending topic",
  "productName": "「product name」",
  "coreFunction": "core function description",
  "targetUsers": "target user description",
  "eventTimeline": ["event point 1", "event point 2", "event point 3"],
  "scores": {{
{example_scores},
    "total": {example_total}
  }}
}}
```

Output the JSON array only, with no other text. Make sure total equals the sum of the other five scores."""
