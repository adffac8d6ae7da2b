import inspect
import os
import sys
import unittest
from typing import Any

import coverage

# Can't use __file__ because when running with coverage via command line,
# __file__ is not the full path
current_location = os.path.dirname(os.path.abspath(inspect.stack()[0][1]))


def run_test_suite() -> Any:
    tests_source_root = os.path.join(current_location, 'tests', 'unit')

    # Needed when the package is not installed so the imports are properly resolved.
    source_root = os.path.join(current_location, 'src')
    sys.path.append(source_root)

    cov = coverage.Coverage(source=[os.path.join(source_root, 'intervalmap')])
    cov.start()

    tests = unittest.TestLoader().discover(tests_source_root)
    result = unittest.runner.TextTestRunner().run(tests)

    cov.stop()
    cov.report()

    return result


if __name__ == '__main__':
    result = run_test_suite()
    print(result)
    sys.exit(0 if result.wasSuccessful() else 1)
