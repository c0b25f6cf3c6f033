# mirror <sysexits.h>
EXIT_OK = 0  # All coverage requirements met
EXIT_THRESHOLD = 1  # Coverage below a configured minimum
EXIT_DATAERR = 65  # Tool output could not be parsed
EXIT_SOFTWARE = 70  # An external tool failed or could not be started
EXIT_IOERR = 74  # Artifact directory or raw profiles could not be managed
EXIT_CONFIG = 78  # Invalid thresholds or Cargo metadata
