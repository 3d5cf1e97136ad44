import logging
from typing import Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from NavigableHistory import NavigableHistory, DEFAULT_CAPACITY
from ObservableHistory import ObservableHistory
from ObserverNotifier import ObserverNotifier, log_observer_error


logger = logging.getLogger(__name__)


class HistoryConfig(BaseModel):
    """
    Construction options of a history.

    capacity: Maximum number of past entries, also accepted as `max_length`.
    strict: Raise on navigation beyond the available entries instead of failing soft.
    notify: Build an ObservableHistory. If False a bare NavigableHistory is built.
    isolate_observer_errors: Log a failing observer and keep notifying the others,
                             instead of propagating its exception.
    """
    model_config = ConfigDict(extra='forbid')

    capacity: PositiveInt = Field(default=DEFAULT_CAPACITY,
                                  validation_alias=AliasChoices('capacity', 'max_length'))
    strict: bool = False
    notify: bool = True
    isolate_observer_errors: bool = False


def load_history_config(data: dict) -> Tuple[Optional[HistoryConfig], str]:
    """
    Validates a dict of history options.

    Args:
        data (dict): Raw options, e.g. {'max_length': 20, 'strict': True}. Missing keys take defaults.

    Returns:
        Tuple[Optional[HistoryConfig], str]:
          - On success: (config, empty string)
          - On failure: (None, semicolon-delimited error messages)

    Example:
        config, err = load_history_config({'capacity': 0})
        # config is None
        # err == 'Field [capacity]: Input should be greater than 0 (Type error: greater_than)'
    """
    try:
        return HistoryConfig.model_validate(data), ''
    except ValidationError as e:
        error_details = []
        for error in e.errors():
            field_path = ".".join(map(str, error['loc']))
            error_details.append(f"Field [{field_path}]: {error['msg']} (Type error: {error['type']})")

        error_str = "; ".join(error_details)
        logger.error(f'History config verification fail: {error_str}')
        return None, error_str


def create_history(config: Optional[HistoryConfig] = None,
                   **overrides) -> Union[NavigableHistory, ObservableHistory]:
    """
    Builds the history described by config, with keyword overrides applied on top of it.
    Raises pydantic.ValidationError for invalid options.

        history = create_history(capacity=10, isolate_observer_errors=True)
    """
    options = config.model_dump() if config is not None else {}
    if 'max_length' in overrides:
        overrides['capacity'] = overrides.pop('max_length')
    options.update(overrides)
    config = HistoryConfig.model_validate(options)

    history = NavigableHistory(capacity=config.capacity, strict=config.strict)
    if not config.notify:
        return history

    error_handler = log_observer_error if config.isolate_observer_errors else None
    return ObservableHistory(history, ObserverNotifier(error_handler))
