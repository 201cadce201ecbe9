"""
Color constants for gotohalign plotting.
"""

# =============================================================================
# SYMBOL COLORS
# =============================================================================

# Nucleotide colors; every other letter falls back to black
NT_COLOR = {
    "A": "#74AB86",  # soft green
    "C": "#6E93C0",  # soft blue
    "G": "#C19A5A",  # soft warm ochre
    "T": "#C26F6F",  # soft red
    "U": "#C26F6F",  # as T
    "": "#000000",
}

# =============================================================================
# HEATMAP COLORMAPS
# =============================================================================
HEATMAP_COLORMAPS = {
    'default': 'Reds',
    'diverging': 'RdBu_r',
}
