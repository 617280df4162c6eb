import os
import sys
import traceback

import sentry_sdk


def emit_current_exception():
    if os.environ.get("DEBUG") in ["1", 1, True, "true"]:
        traceback.print_exc(file=sys.stdout)
    else:
        sentry_sdk.capture_exception()


class RegistrationClosedError(Exception):
    def __init__(self, reason=None):
        super().__init__()
        self.msg = reason or "New registrations are currently closed."

    def __str__(self):
        return self.msg


class AlreadyRegisteredError(Exception):
    def __init__(self):
        super().__init__()
        self.msg = "You are already registered with a team."

    def __str__(self):
        return self.msg


class SubmissionClosedError(Exception):
    def __init__(self, reason=None):
        super().__init__()
        if reason is not None:
            self.msg = reason
        else:
            self.msg = "Submissions are currently closed."

    def __str__(self):
        return self.msg
