"""
Centralized constants for the footprint Arch Index pipeline.

All magic numbers extracted into semantically meaningful constants to improve
code maintainability and readability.

Version: 1.0.0
"""

# ============================================================================
# Intensity Constants
# ============================================================================

# ITU-R BT.601 luma weights
LUMA_WEIGHT_RED = 0.299
LUMA_WEIGHT_GREEN = 0.587
LUMA_WEIGHT_BLUE = 0.114

MAX_INTENSITY = 255  # 8-bit sample ceiling
MIN_CONTRAST_RANGE = 1  # Range floor for uniform images
RGBA_CHANNELS = 4

# ============================================================================
# Segmentation Constants
# ============================================================================

# Adaptive thresholding
ADAPTIVE_BLOCK_SIZE_DEFAULT = 25  # Local mean window side (pixels)
ADAPTIVE_BIAS_DEFAULT = 10  # Subtracted from local mean

# Morphological closing
MORPH_KERNEL_SIZE_DEFAULT = 5  # Square structuring element side (pixels)

# Toe trimming
TOE_REMOVAL_FRACTION_DEFAULT = 0.18  # Top fraction of footprint height removed

# ============================================================================
# Measurement Constants
# ============================================================================

REGION_COUNT = 3  # Forefoot, midfoot, rearfoot

# Arch Index cut-off (AI > threshold = flat)
FLAT_FOOT_ARCH_INDEX_THRESHOLD = 0.28

CLASSIFICATION_FLAT = "flat"
CLASSIFICATION_NORMAL = "normal"

# ============================================================================
# Visualization Constants
# ============================================================================

# Region colors (RGB)
COLOR_REARFOOT = (233, 91, 133)  # Area A - rose
COLOR_MIDFOOT = (251, 189, 35)  # Area B - amber
COLOR_FOREFOOT = (66, 133, 244)  # Area C - blue
COLOR_BACKGROUND = (76, 175, 80)  # Excluded region - green
COLOR_DIVIDER = (255, 255, 255)

PROCESSED_FOOTPRINT_GRAY_MAX = 80  # Silhouette gray cap
PROCESSED_FOOTPRINT_GRAY_SCALE = 0.5  # Luminance multiplier for silhouette

DIVIDER_LINE_THICKNESS = 2
DIVIDER_SEARCH_ROWS = 3  # Rows above/below a boundary scanned for line extent

OPAQUE_ALPHA = 255

# Plot parameters
PLOT_DPI = 150
PLOT_FIGSIZE_WIDTH = 15
PLOT_FIGSIZE_HEIGHT = 7

# ============================================================================
# Export Constants
# ============================================================================

EXCEL_FLOAT_PRECISION = 4  # Decimal places for ratio columns
ARCH_INDEX_DISPLAY_PRECISION = 4

SUPPORTED_IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.tif', '.tiff', '.webp')
