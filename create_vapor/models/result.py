"""Pipeline result models for create-vapor."""

from typing import List, Optional

from pydantic import BaseModel, Field
from typing_extensions import Literal

from .options import ScaffoldOptions

StepStatus = Literal["success", "failed", "skipped", "planned"]


class StepResult(BaseModel):
    """Outcome of one pipeline step."""

    name: str
    status: StepStatus = "skipped"
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


class ScaffoldResult(BaseModel):
    """Outcome of a whole scaffold run."""

    options: ScaffoldOptions
    project_path: str
    dry_run: bool = False
    steps: List[StepResult] = Field(default_factory=list)

    def record(self, name: str, status: StepStatus, detail: str = "") -> StepResult:
        """Append a step outcome and return it."""
        step = StepResult(name=name, status=status, detail=detail)
        self.steps.append(step)
        return step

    def step(self, name: str) -> Optional[StepResult]:
        """Get the outcome of a step by name."""
        for step in self.steps:
            if step.name == name:
                return step
        return None

    @property
    def dependencies_installed(self) -> bool:
        install = self.step("install")
        return install is not None and install.succeeded
