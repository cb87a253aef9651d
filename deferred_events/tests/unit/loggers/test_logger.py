import logging

from deferred_events.loggers import Logger


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestLogger:
    def test_component_logger_hierarchy(self):
        log = Logger(name="unit", type="registry", level="debug")

        logger = log.get_logger()
        assert logger.name == "deferred_events.registry.unit"
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) >= 1

    def test_records_carry_class_name(self):
        log = Logger(name="records", type="scheduler", level="debug")
        handler = ListHandler()
        log.get_logger().addHandler(handler)
        try:
            log.debug("hello")
            log.log("custom", level="warning")
        finally:
            log.get_logger().removeHandler(handler)

        assert [r.getMessage() for r in handler.records] == ["hello", "custom"]
        assert all(r.class_name == "records" for r in handler.records)

    def test_level_filters_messages(self):
        log = Logger(name="quiet", type="registry", level="warning")
        handler = ListHandler()
        log.get_logger().addHandler(handler)
        try:
            log.debug("dropped")
            log.warning("kept")
        finally:
            log.get_logger().removeHandler(handler)

        assert [r.getMessage() for r in handler.records] == ["kept"]
