import io
import logging

import fixtures


class Logging(fixtures.Fixture):
    """Capture logging output at DEBUG level."""

    def _setUp(self):
        self.logger = logging.getLogger()
        self.stream = io.StringIO()
        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        self.logger.addHandler(handler)
        self.addCleanup(self.logger.removeHandler, handler)
        self.addCleanup(self.logger.setLevel, self.logger.level)
        self.logger.setLevel(logging.DEBUG)

    @property
    def output(self):
        return self.stream.getvalue()
