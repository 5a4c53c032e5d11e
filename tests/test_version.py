import re
from pathlib import Path

import finperm


def test_version():
    assert re.fullmatch(r'\d+\.\d+\.\d+', finperm.__version__)
    text = (Path(finperm.__file__).parent / 'version.py').read_text()
    assert re.search(r"__version__ = '(.+)'",
                     text).group(1) == finperm.__version__
