"""
Location matching package.

Responsibilities:
- Derive the set of cities actually present in the room inventory.
- Match free-text city names against the province reference list.
- Track the province / district / ward drill-down selection.
"""
