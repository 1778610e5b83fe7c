"""
Configuration for an LCA simulation batch.
"""
import math

import numpy as np

from lca.agent_config import DT, MAX_TIME, NOISE_SD, NON_LINEAR


def max_iter_for(max_time, dt):
    """
    Number of time steps needed to cover [0, max_time] at resolution dt.

    Matches the length of the grid 0, dt, 2*dt, ..., max_time, including both
    end points. The small epsilon guards against max_time/dt landing just
    below an integer in floating point.

    Args:
        max_time (float): Maximum decision time in seconds.
        dt (float): Step size in seconds.

    Returns:
        int: Maximum number of iterations per trial.
    """
    if dt <= 0:
        raise ValueError("dt must be positive.")
    if max_time < 0:
        raise ValueError("max_time cannot be negative.")
    return int(math.floor(max_time / dt + 1e-10)) + 1


class SimulationConfig:
    """
    Read-only parameter set shared by every trial of a batch.

    Attributes:
        n_acc (int): Number of accumulators.
        I (np.ndarray): Input to every accumulator.
        kappa (float): Leak.
        beta (float): Lateral inhibition.
        Z (float): Decision threshold.
        s (float): Noise standard deviation.
        dt (float): Step size in seconds.
        max_iter (int): Maximum number of steps per trial.
        non_linear (bool): Floor activations at zero after each step.
        x0 (np.ndarray): Start point of every accumulator.
    """

    def __init__(self, I, kappa, beta, Z, s=NOISE_SD, dt=DT, max_iter=None,
                 non_linear=NON_LINEAR, x0=None, validate=True):
        I = np.array(I, dtype=float).ravel()
        if x0 is None:
            x0 = np.zeros(I.size)
        x0 = np.array(x0, dtype=float).ravel()
        if max_iter is None:
            max_iter = max_iter_for(MAX_TIME, dt)

        # Private copies, so neither the caller nor a trial can mutate them
        I.flags.writeable = False
        x0.flags.writeable = False

        object.__setattr__(self, 'n_acc', int(I.size))
        object.__setattr__(self, 'I', I)
        object.__setattr__(self, 'kappa', float(kappa))
        object.__setattr__(self, 'beta', float(beta))
        object.__setattr__(self, 'Z', float(Z))
        object.__setattr__(self, 's', float(s))
        object.__setattr__(self, 'dt', float(dt))
        object.__setattr__(self, 'max_iter', int(max_iter))
        object.__setattr__(self, 'non_linear', bool(non_linear))
        object.__setattr__(self, 'x0', x0)

        if validate:
            self.validate()

    def __setattr__(self, name, value):
        raise AttributeError(f"SimulationConfig is read-only (tried to set '{name}').")

    @property
    def noise_factor(self):
        """Scale applied to each N(0, 1) draw: sqrt(dt) * s."""
        return math.sqrt(self.dt) * self.s

    @property
    def timeout_rt(self):
        """Reaction time reported for trials without a response."""
        return self.max_iter * self.dt - self.dt / 2.0

    @classmethod
    def from_params(cls, params):
        """
        Build a configuration from a JSON-style parameter dictionary.

        Args:
            params (dict): Must contain 'I', 'kappa', 'beta' and 'Z'. Optional
                           keys: 's', 'dt', 'max_iter' or 'max_time',
                           'non_linear', 'x0'.

        Returns:
            SimulationConfig: Validated configuration.
        """
        missing = [key for key in ('I', 'kappa', 'beta', 'Z') if key not in params]
        if missing:
            raise ValueError(f"Missing required LCA parameters: {', '.join(missing)}")

        dt = params.get('dt', DT)
        if 'max_iter' in params:
            max_iter = params['max_iter']
        else:
            max_iter = max_iter_for(params.get('max_time', MAX_TIME), dt)

        return cls(
            I=params['I'],
            kappa=params['kappa'],
            beta=params['beta'],
            Z=params['Z'],
            s=params.get('s', NOISE_SD),
            dt=dt,
            max_iter=max_iter,
            non_linear=params.get('non_linear', NON_LINEAR),
            x0=params.get('x0'),
        )

    def validate(self):
        """
        Validate configuration parameters.

        Returns:
            bool: True if configuration is valid
        """
        if self.n_acc < 1:
            raise ValueError("At least one accumulator is required (I is empty).")
        if self.x0.size != self.n_acc:
            raise ValueError(
                f"The number of accumulators in I ({self.n_acc}) is not the same "
                f"as the number of start points in x0 ({self.x0.size})."
            )
        if self.dt <= 0:
            raise ValueError("dt must be positive.")
        if self.max_iter < 1:
            raise ValueError("max_iter must be at least 1.")
        if self.kappa < 0:
            raise ValueError("kappa (leak) cannot be negative.")
        if self.beta < 0:
            raise ValueError("beta (inhibition) cannot be negative.")
        if self.s < 0:
            raise ValueError("noise s cannot be negative.")
        if not (np.all(np.isfinite(self.I)) and np.all(np.isfinite(self.x0))):
            raise ValueError("I and x0 must be finite.")
        if not all(math.isfinite(v) for v in (self.kappa, self.beta, self.Z, self.s, self.dt)):
            raise ValueError("kappa, beta, Z, s and dt must be finite.")
        return True

    def as_dict(self):
        """Plain dictionary of the parameters (lists for the vectors)."""
        return {
            'I': self.I.tolist(),
            'kappa': self.kappa,
            'beta': self.beta,
            'Z': self.Z,
            's': self.s,
            'dt': self.dt,
            'max_iter': self.max_iter,
            'non_linear': self.non_linear,
            'x0': self.x0.tolist(),
        }

    def __repr__(self):
        return (f"SimulationConfig(n_acc={self.n_acc}, I={self.I.tolist()}, "
                f"kappa={self.kappa}, beta={self.beta}, Z={self.Z}, s={self.s}, "
                f"dt={self.dt}, max_iter={self.max_iter}, "
                f"non_linear={self.non_linear}, x0={self.x0.tolist()})")
