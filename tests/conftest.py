from pytest import Item, fixture

from stepcalc.engine import Engine
from stepcalc.real import DecimalReal, FloatReal


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP, and enable_assertion_pass_hook set.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture(params=['decimal', 'float'])
def engine(request) -> Engine:
    '''
    Fresh engine, once per backend.
    '''
    return Engine(backend=request.param)


@fixture
def reals() -> DecimalReal:
    return DecimalReal()


@fixture
def floats() -> FloatReal:
    return FloatReal()
