from dataclasses import dataclass, asdict
from typing import Literal

@dataclass
class TraceEntry:
    pass_id: int
    complex: str
    step: str
    role: Literal['input', 'output']
    quantity: str
    value: float
    unit: str

    def to_dict(self):
        return asdict(self)
