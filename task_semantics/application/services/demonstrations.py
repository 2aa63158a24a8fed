"""
Demonstration runner - exercises value and reference semantics and records
what it observed.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from task_semantics.application.services.passing import (
    modify_priority, modify_priority_by_ref, modify_reference, modify_value,
    modify_value_by_ref, replace_task_by_ref,
    read_only_value_reference, try_mutate_read_only, MODIFIED_TITLE
)
from task_semantics.domain.exceptions import (
    ConfigurationError, ImmutabilityViolation, TaskSemanticsError, UnboxingError
)
from task_semantics.domain.interfaces.base import IErrorHandler, ILogger
from task_semantics.domain.models.configuration import DemoConfiguration
from task_semantics.domain.models.entities import DemonstrationResult, Task, TaskPriority
from task_semantics.domain.models.references import Ref, box, by_value, readonly, unbox
from task_semantics.domain.models.samples import sample_tasks
from task_semantics.domain.services.iteration import (
    indexed_iteration, sequential_iteration, visit_orders_match
)


class DemonstrationRunner:
    """Runs the configured demonstrations in order."""

    def __init__(self, config: DemoConfiguration, logger: ILogger, error_handler: IErrorHandler):
        self.config = config
        self.logger = logger
        self.error_handler = error_handler

        self._demonstrations: Dict[str, Callable[[], DemonstrationResult]] = {
            "value_types": self.demonstrate_value_types,
            "reference_types": self.demonstrate_reference_types,
            "boxing": self.demonstrate_boxing,
            "passing_behavior": self.demonstrate_passing_behavior,
            "read_only_reference": self.demonstrate_read_only_reference,
            "iteration": self.demonstrate_iteration,
        }

    @property
    def available(self) -> List[str]:
        return list(self._demonstrations)

    def run(self, name: str) -> DemonstrationResult:
        """Run one demonstration by name.

        Domain errors raised by the demonstration are handled and reported as
        a failed result; anything else propagates.
        """
        demonstration = self._demonstrations.get(name)
        if demonstration is None:
            raise ConfigurationError(
                f"Unknown demonstration: {name}",
                context={'available': ", ".join(self._demonstrations)}
            )

        try:
            result = demonstration()
        except TaskSemanticsError as e:
            message = self.error_handler.handle_error(e, {'component': 'demonstrations', 'demonstration': name})
            result = DemonstrationResult(name=name, passed=False, error_message=message)

        log = self.logger.info if result.passed else self.logger.error
        log(result.get_summary(), component="demonstrations", **result.to_dict())
        return result

    def run_all(self, names: Optional[Iterable[str]] = None) -> List[DemonstrationResult]:
        """Run the given demonstrations, or every enabled one."""
        selected = list(names) if names is not None else list(self.config.enabled_demonstrations)
        unknown = [name for name in selected if name not in self._demonstrations]
        if unknown:
            raise ConfigurationError(f"Unknown demonstrations: {unknown}")

        results = [self.run(name) for name in selected]

        self.logger.info(
            "Demonstrations finished",
            component="demonstrations",
            total=len(results),
            passed=sum(1 for r in results if r.passed)
        )
        return results

    def demonstrate_value_types(self) -> DemonstrationResult:
        original_priority = 1
        copied_priority = original_priority
        copied_priority = 5

        priority1 = TaskPriority(1, "High")
        priority2 = priority1.copy()
        copy_equal = priority2 == priority1 and priority2 is not priority1

        # replacing what the second holder refers to
        priority2 = priority2.with_level(2)

        passed = original_priority == 1 and copy_equal and priority1.level == 1 and priority2.level == 2
        return DemonstrationResult(
            name="value_types",
            passed=passed,
            error_message=None if passed else "Copying a value did not produce an independent duplicate",
            observations={
                'original_int': original_priority,
                'copied_int': copied_priority,
                'priority1_level': priority1.level,
                'priority2_level': priority2.level,
            }
        )

    def demonstrate_reference_types(self) -> DemonstrationResult:
        task1 = Task(
            title="Implement authentication",
            priority=TaskPriority(1, "High"),
            created_at=datetime.now(timezone.utc)
        )

        task2 = task1
        task2.title = "Implement authorization"

        task3 = task1.clone()
        task3.title = "Independent copy"

        aliased = task1 is task2 and task1.title == "Implement authorization"
        cloned = task3 is not task1 and task3.id == task1.id and task1.title == "Implement authorization"

        passed = aliased and cloned
        return DemonstrationResult(
            name="reference_types",
            passed=passed,
            error_message=None if passed else "Task assignment did not alias the instance",
            observations={
                'task1_title': task1.title,
                'task2_title': task2.title,
                'clone_title': task3.title,
                'same_instance': task1 is task2,
            }
        )

    def demonstrate_boxing(self) -> DemonstrationResult:
        value_type = 42

        boxed = box(value_type)
        unboxed = unbox(boxed, int)

        try:
            unbox(boxed, str)
            wrong_type_rejected = False
        except UnboxingError as e:
            self.error_handler.handle_error(e, {'component': 'demonstrations', 'demonstration': 'boxing'})
            wrong_type_rejected = True

        passed = unboxed == value_type and wrong_type_rejected
        return DemonstrationResult(
            name="boxing",
            passed=passed,
            error_message=None if passed else "Unboxing did not round-trip or accepted the wrong type",
            observations={
                'boxed_value': boxed.value,
                'boxed_type': boxed.boxed_type.__name__,
                'unboxed_value': unboxed,
                'wrong_type_rejected': wrong_type_rejected,
            }
        )

    def demonstrate_passing_behavior(self) -> DemonstrationResult:
        my_number = 50
        modify_value(my_number)
        after_modify_value = my_number

        my_priority = TaskPriority(1, "High")
        modify_priority(by_value(my_priority))
        after_modify_priority = my_priority.level

        my_task = Task(title="Original")
        modify_reference(by_value(my_task))
        after_modify_reference = my_task.title

        number_ref = Ref(my_number)
        modify_value_by_ref(number_ref)
        my_number = number_ref.value

        priority_ref = Ref(my_priority)
        modify_priority_by_ref(priority_ref)
        my_priority = priority_ref.value

        replacement = Task(title="Replacement")
        task_ref = Ref(my_task)
        replace_task_by_ref(task_ref, replacement)
        my_task = task_ref.value

        passed = (
            after_modify_value == 50
            and after_modify_priority == 1
            and after_modify_reference == MODIFIED_TITLE
            and my_number == 100
            and my_priority.level == 2
            and my_task is replacement
        )
        return DemonstrationResult(
            name="passing_behavior",
            passed=passed,
            error_message=None if passed else "A passing mode behaved unexpectedly",
            observations={
                'after_modify_value': after_modify_value,
                'after_modify_priority': after_modify_priority,
                'after_modify_reference': after_modify_reference,
                'after_modify_value_by_ref': my_number,
                'after_modify_priority_by_ref': my_priority.level,
                'after_replace_task_by_ref': my_task.title,
            }
        )

    def demonstrate_read_only_reference(self) -> DemonstrationResult:
        priority = TaskPriority(3, "Low")
        level = read_only_value_reference(readonly(priority))

        task = Task(id=1, title="Original", priority=priority)
        try:
            try_mutate_read_only(readonly(task), 'title', "Changed through view")
            rejected = False
        except ImmutabilityViolation as e:
            self.error_handler.handle_error(e, {'component': 'demonstrations', 'demonstration': 'read_only_reference'})
            rejected = True

        passed = level == 3 and rejected and task.title == "Original"
        return DemonstrationResult(
            name="read_only_reference",
            passed=passed,
            error_message=None if passed else "Mutation through a read-only reference was not rejected",
            observations={
                'priority_level': level,
                'mutation_rejected': rejected,
                'task_title': task.title,
            }
        )

    def demonstrate_iteration(self) -> DemonstrationResult:
        tasks = sample_tasks()

        indexed = []
        for index, task in indexed_iteration(tasks, step=self.config.signed_step):
            self.logger.debug(f"Index {index}: {task.title}", component="iteration")
            indexed.append((index, task.id))

        sequential = []
        for task in sequential_iteration(tasks):
            self.logger.debug(f"{task.title} - {task.status.value}", component="iteration")
            sequential.append(task.id)

        orders_match = visit_orders_match(tasks)
        positions_match = all(tasks[index].id == task_id for index, task_id in indexed)

        passed = orders_match and positions_match
        return DemonstrationResult(
            name="iteration",
            passed=passed,
            error_message=None if passed else "Indexed and sequential iteration disagree",
            observations={
                'indexed': indexed,
                'sequential': sequential,
                'orders_match': orders_match,
            }
        )
