"""
Model recommendation engine.

Responsibilities:
- Derive comparable cost / quality / context features from catalog records.
- Score pairwise similarity between models.
- Filter the catalog against declared usage requirements.
- Rank candidates by benchmark value per unit of cost.
"""
