# Filename: lca/agent_config.py
# Default values for the LCA simulation wrapper (Miletic et al., 2017 settings)

# Noise
NOISE_SD = 0.1          # Standard deviation of the Wiener noise 's'

# Time discretisation
DT = 0.001              # Step size in seconds (1 ms resolution)
MAX_TIME = 5.0          # Maximum decision time simulated per trial (s)

# Batch
N_TRIALS = 1000         # Trials per simulated dataset
DEFAULT_SEED = None     # None draws fresh entropy from the OS

# Model switches
NON_LINEAR = True       # Floor activations at zero after every step

# Output formatting
NDT_MS_CUTOFF = 1.0     # Non-decision times above this are read as milliseconds
RT_DECIMALS = 3         # Reaction times are rounded to ms
