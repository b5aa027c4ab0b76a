"""Building blocks of the calculation pipeline.

Classes:
    - Quantity: Named physical value with units and owning step.
    - QuantityRegistry: Named store of quantities shared by a pipeline.
    - PipelineStep: One declared step of a pipeline.

.. autoclass:: surfacefire.base_classes.quantity.QuantityRegistry
    :members:

.. autoclass:: surfacefire.base_classes.pipeline_step.PipelineStep
    :members:
"""

from surfacefire.base_classes.quantity import Quantity, QuantityRegistry
from surfacefire.base_classes.pipeline_step import PipelineStep, check_step_order, steps_for

__all__ = [
    "Quantity",
    "QuantityRegistry",
    "PipelineStep",
    "check_step_order",
    "steps_for",
]
