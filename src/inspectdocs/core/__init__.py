"""Records, document models and the formatting helpers shared by generators."""
