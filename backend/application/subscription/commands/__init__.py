"""Commands for subscription domain."""

from .change_status import ChangeStatusCommand, ChangeStatusCommandHandler, StatusAction
from .create_subscription import CreateSubscriptionCommand, CreateSubscriptionCommandHandler
from .delete_subscription import DeleteSubscriptionCommand, DeleteSubscriptionCommandHandler
from .record_delivery import RecordDeliveryCommand, RecordDeliveryCommandHandler
from .skip_delivery import SkipDeliveryCommand, SkipDeliveryCommandHandler
from .update_meal import UpdateMealCommand, UpdateMealCommandHandler
from .update_schedule import UpdateScheduleCommand, UpdateScheduleCommandHandler

__all__ = [
    # Lifecycle
    "CreateSubscriptionCommand",
    "CreateSubscriptionCommandHandler",
    "ChangeStatusCommand",
    "ChangeStatusCommandHandler",
    "StatusAction",
    "DeleteSubscriptionCommand",
    "DeleteSubscriptionCommandHandler",
    # Schedule
    "UpdateScheduleCommand",
    "UpdateScheduleCommandHandler",
    "UpdateMealCommand",
    "UpdateMealCommandHandler",
    # Deliveries
    "SkipDeliveryCommand",
    "SkipDeliveryCommandHandler",
    "RecordDeliveryCommand",
    "RecordDeliveryCommandHandler",
]
