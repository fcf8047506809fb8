"""converge - A generic reconcile-and-poll engine for declarative resource plugins."""

from .blueprints import Blueprint as Blueprint
from .client import RemoteClient as RemoteClient
from .config import EngineConfig as EngineConfig
from .context import Context as Context
from .reconciler import LifecycleState as LifecycleState
from .reconciler import Reconciler as Reconciler
from .resource import Computed as Computed
from .resource import ForceNew as ForceNew
from .resource import ResourceType as ResourceType
from .resource import WaitSpec as WaitSpec
from .resource import resource as resource
from .specop import Absent as Absent
from .specop import Ensure as Ensure
from .specop import Present as Present
from .specop import SpecOp as SpecOp
from .store import MemoryStore as MemoryStore
from .store import StateStore as StateStore
from .waiter import Waiter as Waiter
