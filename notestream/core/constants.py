"""Global constants for Note Stream."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Tuning reference
REFERENCE_HZ = 440.0
REFERENCE_NOTE = 69  # A4
SEMITONES_PER_OCTAVE = 12
CENTS_PER_OCTAVE = 1200

# Pitch estimation
RMS_THRESHOLD = 0.01
TRIM_THRESHOLD = 0.2
MIN_WINDOW_LENGTH = 4

# Display range (G3 .. C7)
MIN_NOTE = 55
MAX_NOTE = 96

# Re-articulation cooldown
COOLDOWN_MS = 200.0

# Capture defaults
DEFAULT_SR = 44100
DEFAULT_WINDOW_SIZE = 2048
DEFAULT_FRAME_RATE = 60.0  # display refresh cadence
DEFAULT_HIGHPASS_HZ = 80.0
DEFAULT_HIGHPASS_Q = 0.5

# On-screen lifetime of an onset
NOTE_LIFETIME_MS = 1000.0

# MIDI ranges
MIDI_MIN = 0
MIDI_MAX = 127
