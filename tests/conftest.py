import pytest
from _pytest.unittest import TestCaseFunction
from testscenarios import WithScenarios


# pytest's unittest runner rebinds the test method on the original instance,
# so testscenarios' per-scenario clones would call it on the un-setUp
# original. Run scenario test cases through their own run() instead.
@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(items):
    for item in items:
        if (isinstance(item, TestCaseFunction)
                and issubclass(item.cls, WithScenarios)):
            item.runtest = (lambda it=item: it.instance(result=it))
