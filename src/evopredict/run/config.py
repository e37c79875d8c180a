import configparser
import numbers
import os

class Config:

    @staticmethod
    def _parse_layer_sizes(raw_sizes):
        """
        Parse layer_sizes from string to list.

        Parameters:
            raw_sizes: Either a comma-separated list of integers, an empty string,
                       None, or already a list

        Returns:
            List of hidden layer widths
        """
        if raw_sizes is None:
            return []
        if isinstance(raw_sizes, (list, tuple)):
            return [int(size) for size in raw_sizes]

        parsed = [size.strip() for size in raw_sizes.split(',') if size.strip()]
        try:
            return [int(size) for size in parsed]
        except ValueError:
            raise ValueError(f"Invalid layer_sizes '{raw_sizes}': expected comma-separated integers") from None

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with default values
                         (can be adjusted by setting attributes manually).
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.num_inputs  = 8
            self.num_outputs = 8
            self.layer_sizes = [16]

            self.activation_thresh = 0.0
            self.trait_swap_chance = 0.5

            self.weight_mutate_chance = 0.1
            self.weight_mutate_amount = 0.1
            self.offset_mutate_chance = 0.1
            self.offset_mutate_amount = 0.05

            self.num_jobs = -1
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [NETWORK]

        # The number of input bits, through which the network receives observations.
        self.num_inputs = get_value('NETWORK', 'num_inputs', int)

        # The number of output bits, through which the network delivers decisions.
        self.num_outputs = get_value('NETWORK', 'num_outputs', int)

        # The widths of the hidden layers, as a comma-separated list (e.g. "16, 8").
        # Leave empty (or use "None") to connect inputs directly to outputs.
        self.layer_sizes = get_value('NETWORK', 'layer_sizes', str, default='')

        # [NEURON]

        # A neuron fires when the weighted sum of its inputs exceeds this value.
        self.activation_thresh = get_value('NEURON', 'activation_thresh', float, default=0.0)

        # During crossover, the probability that a connection of this neuron
        # is swapped with the corresponding connection of the other network.
        self.trait_swap_chance = get_value('NEURON', 'trait_swap_chance', float, default=0.5)

        # [CONNECTION]

        # The probability that mutation will re-draw the 'weight' of a connection.
        self.weight_mutate_chance = get_value('CONNECTION', 'weight_mutate_chance', float, default=0.1)

        # The new 'weight' is drawn uniformly from [weight - amount, weight + amount].
        self.weight_mutate_amount = get_value('CONNECTION', 'weight_mutate_amount', float, default=0.1)

        # The probability that mutation will re-draw the 'offset' of a connection.
        self.offset_mutate_chance = get_value('CONNECTION', 'offset_mutate_chance', float, default=0.1)

        # The new 'offset' is drawn uniformly from [offset - amount, offset + amount].
        self.offset_mutate_amount = get_value('CONNECTION', 'offset_mutate_amount', float, default=0.05)

        # [PARALLEL] (optional section)

        # Number of parallel processes used to generate new networks.
        #  1 = serial, -1 = all available CPU cores, >1 = that many processes
        self.num_jobs = get_value('PARALLEL', 'num_jobs', int, default=-1)

        self._validate()

    def _validate(self):
        """
        Check that all values are present and within their allowed ranges.
        Only 'layer_sizes' may be 'none' (no hidden layers).
        """
        for name in ('num_inputs', 'num_outputs', 'num_jobs'):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral):
                raise ValueError(f"'{name}' must be an integer, got {value!r}")
        for name in ('activation_thresh', 'trait_swap_chance',
                     'weight_mutate_chance', 'weight_mutate_amount',
                     'offset_mutate_chance', 'offset_mutate_amount'):
            value = getattr(self, name)
            if not isinstance(value, numbers.Real):
                raise ValueError(f"'{name}' must be a number, got {value!r}")

        for name in ('num_inputs', 'num_outputs'):
            if getattr(self, name) <= 0:
                raise ValueError(f"'{name}' must be positive, got {getattr(self, name)}")
        for size in self.layer_sizes:
            if size <= 0:
                raise ValueError(f"All layer sizes must be positive, got {self.layer_sizes}")

        for name in ('trait_swap_chance', 'weight_mutate_chance', 'offset_mutate_chance'):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"'{name}' must be between 0 and 1, got {getattr(self, name)}")
        for name in ('weight_mutate_amount', 'offset_mutate_amount'):
            if getattr(self, name) < 0.0:
                raise ValueError(f"'{name}' cannot be negative, got {getattr(self, name)}")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse layer_sizes when set.
        This allows users to write config.layer_sizes = "16, 8" and have it
        automatically converted to [16, 8].
        """
        if name == 'layer_sizes':
            value = self._parse_layer_sizes(value)
        super().__setattr__(name, value)
