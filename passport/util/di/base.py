"""Provider base class carrying swap metadata."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests can replace
Component = Literal["persistence", "cache", "oauth"]


class ProviderBase(Provider):
    """dishka provider with metadata for the test container.

    ``__mock_component__`` names the component a base provider stands for
    (``None`` when it is never swapped), ``__is_mock__`` marks the test
    implementation, and ``__depends_on__`` lists components that must run
    for real whenever this one does.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[set[Component]] = set()
