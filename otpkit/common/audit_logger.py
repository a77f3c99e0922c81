import logging

AUDIT_FORMAT = '%(asctime)s - %(message)s'


class AuditLogger:
    def __init__(self, log_file=None, logger_name="otpkit.audit"):
        self.logger = logging.getLogger(logger_name)
        self.handler = None
        if log_file:
            self.handler = logging.FileHandler(log_file)
            self.handler.setFormatter(logging.Formatter(AUDIT_FORMAT))
            self.logger.addHandler(self.handler)
            self.logger.setLevel(logging.INFO)

    def log_action(self, subject, action):
        self.logger.info(f"Subject: {subject or '-'}, Action: {action}")

    def close(self):
        if self.handler is not None:
            self.logger.removeHandler(self.handler)
            self.handler.close()
            self.handler = None
