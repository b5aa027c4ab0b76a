"""Declared pipeline steps and dependency checks.

A pipeline is a plain ordered list of :class:`PipelineStep`. Each step names
the quantities it reads and the quantities it owns, so ordering mistakes and
undeclared reads are caught mechanically.

.. autoclass:: PipelineStep
    :members:
"""
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Set, Tuple

from surfacefire.base_classes.quantity import Quantity, QuantityRegistry
from surfacefire.exceptions import PipelineError


@dataclass(frozen=True)
class PipelineStep:
    """One named step of a pipeline.

    Attributes:
        name (str): Step name, also the owner tag of its outputs.
        inputs (Tuple[str, ...]): Quantities the step reads.
        outputs (Tuple[str, ...]): Quantities the step computes.
        func (Callable): ``func(view, context) -> dict`` mapping every output
            name to its new value.
    """
    name: str
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]
    func: Callable

    def run(self, registry: QuantityRegistry, context) -> Dict[str, float]:
        """Runs the step against ``registry`` and writes its outputs.

        Raises:
            PipelineError: If the step returns a different set of outputs than
                it declares.
        """
        results = self.func(StepView(registry, self), context)
        if set(results) != set(self.outputs):
            missing = sorted(set(self.outputs) - set(results))
            extra = sorted(set(results) - set(self.outputs))
            raise PipelineError(f"Step outputs do not match its declaration "
                                f"(missing {missing}, undeclared {extra})", step=self.name)
        for name in self.outputs:
            registry.set(name, results[name], owner=self.name)
        return results


class StepView:
    """Read access to a registry restricted to one step's declared inputs."""

    def __init__(self, registry: QuantityRegistry, step: PipelineStep):
        self._registry = registry
        self._step = step
        self._allowed = frozenset(step.inputs)

    def quantity(self, name: str) -> Quantity:
        if name not in self._allowed:
            raise PipelineError("Read of an undeclared input", step=self._step.name, quantity=name)
        return self._registry.get(name)

    def __getitem__(self, name: str) -> float:
        return self.quantity(name).value

    def flag(self, name: str) -> bool:
        return self[name] != 0.0


def check_step_order(steps: Sequence[PipelineStep], external: Iterable[str] = ()):
    """Asserts that ``steps`` is a valid topological order.

    Every output must belong to exactly one step, and every input must be an
    output of an earlier step or one of the ``external`` names.

    Raises:
        PipelineError: On the first violation found.
    """
    owners: Dict[str, str] = {}
    for step in steps:
        for name in step.outputs:
            if name in owners:
                raise PipelineError(f"Quantity also owned by '{owners[name]}'",
                                    step=step.name, quantity=name)
            owners[name] = step.name

    available: Set[str] = set(external)
    for step in steps:
        for name in step.inputs:
            if name not in available:
                if name in owners:
                    raise PipelineError(f"Input is computed later by '{owners[name]}'",
                                        step=step.name, quantity=name)
                raise PipelineError("Input is never computed", step=step.name, quantity=name)
        available.update(step.outputs)


def steps_for(steps: Sequence[PipelineStep], targets: Iterable[str]) -> List[PipelineStep]:
    """Steps needed to compute ``targets``, kept in pipeline order.

    Raises:
        PipelineError: If a target is not an output of any step.
    """
    owner = {name: step for step in steps for name in step.outputs}
    needed: Set[str] = set()
    pending = list(targets)
    while pending:
        name = pending.pop()
        if name not in owner:
            raise PipelineError("No step computes this quantity", quantity=name)
        step = owner[name]
        if step.name in needed:
            continue
        needed.add(step.name)
        pending.extend(n for n in step.inputs if n in owner)
    return [s for s in steps if s.name in needed]
