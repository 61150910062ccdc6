"""Video module - Frame extraction and origin lookup."""

# Lazy imports to avoid loading OpenCV on module load
# Use: from relay.video.frames import extract_frame
# Use: from relay.video.origin import OriginFinder
