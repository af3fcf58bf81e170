BOARD_RADIUS = 2
MERGE_THRESHOLD = 10
POINTS_PER_UNIT = 10
LEVEL_TARGET_STEP = 100
OPTION_SLOTS = 3

# Canonical palette; GameConfig.palette_size takes a prefix of it.
PALETTE_COLORS = {
    'cyan':   (0, 240, 255),    # #00F0FF
    'purple': (213, 43, 255),   # #D52BFF
    'green':  (57, 230, 57),    # #39E639
    'red':    (255, 42, 42),    # #FF2A2A
    'orange': (255, 170, 0),    # #FFAA00
    'blue':   (0, 136, 255),    # #0088FF
}
PALETTE_NAMES = tuple(PALETTE_COLORS.keys())

# Animation timings (seconds). Stagger is the delay between consecutive pieces of one request.
PLACE_DURATION = 0.3
PLACE_STAGGER = 0.05
TRANSFER_DURATION = 0.3
TRANSFER_STAGGER = 0.08
POP_DURATION = 0.2
POP_STAGGER = 0.05

# Sound hints emitted per animated piece: (base pitch Hz, pitch step per piece, volume)
SOUND_PLACE = (300.0, 40.0, 0.1)
SOUND_SORT = (400.0, 50.0, 0.08)
SOUND_MERGE = (600.0, 40.0, 0.1)
SOUND_MIN_PITCH = 20.0
SOUND_MAX_PITCH = 20000.0

# Window and layout
WINDOW_WIDTH = 900
WINDOW_HEIGHT = 700
HEX_SIZE = 40           # center-to-corner radius of a board cell in pixels
HEX_SPACING = 0.05      # extra gap between cells as a fraction of HEX_SIZE
BOARD_CENTER_Y_PCT = 0.58
OPTION_ROW_Y = 90
OPTION_SLOT_SPACING = 200
OPTION_PIECE_HEIGHT = 8
STACK_PIECE_HEIGHT = 5
