PROGRESS_UPDATE_INTERVAL = 100

BACKUP_SUFFIX = ".backup"

MODE_BYTE = "byte"
MODE_CHAR = "char"
COPY_MODES = {MODE_BYTE, MODE_CHAR}

DEFAULT_ENCODING = "utf-8"

# Demo paths used when the CLI gets no positional arguments
DEFAULT_PATHS = {
    MODE_BYTE: ("src/source.txt", "src/dest.txt"),
    MODE_CHAR: ("src/characterSource.txt", "src/characterDest.txt"),
}

PHASE_INIT = "init"
PHASE_READ = "read"
PHASE_WRITE = "write"
PHASE_COPY = "copy"
PHASE_CLEANUP = "cleanup"

COPY_PHASES = (PHASE_INIT, PHASE_COPY, PHASE_CLEANUP)
