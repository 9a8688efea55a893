"""DayMenu: one day of a free-text (legacy) meal plan, as recovered by the fallback parser."""
from dataclasses import dataclass, asdict


@dataclass
class DayMenu:
    day: str
    breakfast: str = ""
    lunch: str = ""
    dinner: str = ""

    def set_slot(self, slot: str, value: str):
        '''Stores the text for breakfast, lunch or dinner.'''
        setattr(self, slot, value)

    def slots(self):
        '''Returns (slot, text) pairs in meal order.'''
        return [("breakfast", self.breakfast), ("lunch", self.lunch), ("dinner", self.dinner)]

    def to_dict(self):
        return asdict(self)
