"""xoroplus: Xoroshiro128+ pseudo-random number generator."""

__version__ = "0.1.0"

from xoroplus.config.defaults import default_generator_config as default_generator_config
from xoroplus.config.defaults import default_run_config as default_run_config
from xoroplus.config.defaults import make_generator as make_generator
from xoroplus.config.schema import GeneratorConfig as GeneratorConfig
from xoroplus.config.schema import RunConfig as RunConfig
from xoroplus.core.splitmix import SplitMix64 as SplitMix64
from xoroplus.core.state import GeneratorState as GeneratorState
from xoroplus.core.xoroshiro import DEFAULT_SEED as DEFAULT_SEED
from xoroplus.core.xoroshiro import Xoroshiro128Plus as Xoroshiro128Plus
from xoroplus.io.serialize import read_state as read_state
from xoroplus.io.serialize import write_state as write_state
from xoroplus.utils.exceptions import ConfigError as ConfigError
from xoroplus.utils.exceptions import StateParseError as StateParseError
from xoroplus.utils.exceptions import XoroplusError as XoroplusError
