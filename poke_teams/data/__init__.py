from .type_chart import ALL_TYPES, damage_multiplier, effectiveness_summary

__all__ = ["ALL_TYPES", "damage_multiplier", "effectiveness_summary"]
