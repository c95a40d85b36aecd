from typing import Final

# Valores iniciais do estado de análise (equivalentes ao MML-on-OAP)
DEFAULT_TEMPO: Final[int] = 120
DEFAULT_RESOLUTION: Final[int] = 64
DEFAULT_DURATION: Final[int] = 16
DEFAULT_VELOCITY: Final[int] = 127

# Faixas aceitas pelas diretivas
MIN_TEMPO: Final[int] = 20
MAX_TEMPO: Final[int] = 508
MIN_RESOLUTION: Final[int] = 1
MAX_RESOLUTION: Final[int] = 127
MIN_REPEAT: Final[int] = 2
MAX_VOLUME: Final[int] = 100

# Valor máximo para dados MIDI (notas, durações, ids de bloco)
MAX_MIDI_VALUE: Final[int] = 127

# Extensão usada quando o arquivo de saída não é informado
OUTPUT_SUFFIX: Final[str] = '.mid'

# Tabela General MIDI: categorias e instrumentos na ordem dos programas
INSTRUMENT_CATEGORIES: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    (
        'Piano',
        (
            'Acoustic Grand Piano',
            'Bright Acoustic Piano',
            'Electric Grand Piano',
            'Honky-tonk Piano',
            'Electric Piano 1',
            'Electric Piano 2',
            'Harpsichord',
            'Clavinet',
        ),
    ),
    (
        'Chromatic Percussion',
        (
            'Celesta',
            'Glockenspiel',
            'Music Box',
            'Vibraphone',
            'Marimba',
            'Xylophone',
            'Tubular Bells',
            'Dulcimer',
        ),
    ),
    (
        'Organ',
        (
            'Drawbar Organ',
            'Percussive Organ',
            'Rock Organ',
            'Church Organ',
            'Reed Organ',
            'Accordion',
            'Harmonica',
            'Tango Accordion',
        ),
    ),
    (
        'Guitar',
        (
            'Acoustic Guitar (nylon)',
            'Acoustic Guitar (steel)',
            'Electric Guitar (jazz)',
            'Electric Guitar (clean)',
            'Electric Guitar (muted)',
            'Overdriven Guitar',
            'Distortion Guitar',
            'Guitar Harmonics',
        ),
    ),
    (
        'Bass',
        (
            'Acoustic Bass',
            'Electric Bass (finger)',
            'Electric Bass (pick)',
            'Fretless Bass',
            'Slap Bass 1',
            'Slap Bass 2',
            'Synth Bass 1',
            'Synth Bass 2',
        ),
    ),
    (
        'Strings',
        (
            'Violin',
            'Viola',
            'Cello',
            'Contrabass',
            'Tremolo Strings',
            'Pizzicato Strings',
            'Orchestral Harp',
            'Timpani',
        ),
    ),
    (
        'Ensemble',
        (
            'String Ensemble 1',
            'String Ensemble 2',
            'Synth Strings 1',
            'Synth Strings 2',
            'Choir Aahs',
            'Voice Oohs',
            'Synth Voice',
            'Orchestra Hit',
        ),
    ),
    (
        'Brass',
        (
            'Trumpet',
            'Trombone',
            'Tuba',
            'Muted Trumpet',
            'French Horn',
            'Brass Section',
            'Synth Brass 1',
            'Synth Brass 2',
        ),
    ),
    (
        'Reed',
        (
            'Soprano Sax',
            'Alto Sax',
            'Tenor Sax',
            'Baritone Sax',
            'Oboe',
            'English Horn',
            'Bassoon',
            'Clarinet',
        ),
    ),
    (
        'Pipe',
        (
            'Piccolo',
            'Flute',
            'Recorder',
            'Pan Flute',
            'Blown Bottle',
            'Shakuhachi',
            'Whistle',
            'Ocarina',
        ),
    ),
    (
        'Synth Lead',
        (
            'Lead 1 (square)',
            'Lead 2 (sawtooth)',
            'Lead 3 (calliope)',
            'Lead 4 (chiff)',
            'Lead 5 (charang)',
            'Lead 6 (space voice)',
            'Lead 7 (fifths)',
            'Lead 8 (bass + lead)',
        ),
    ),
    (
        'Synth Pad',
        (
            'Pad 1 (new age)',
            'Pad 2 (warm)',
            'Pad 3 (polysynth)',
            'Pad 4 (choir)',
            'Pad 5 (bowed)',
            'Pad 6 (metallic)',
            'Pad 7 (halo)',
            'Pad 8 (sweep)',
        ),
    ),
    (
        'Synth Effects',
        (
            'FX 1 (rain)',
            'FX 2 (soundtrack)',
            'FX 3 (crystal)',
            'FX 4 (atmosphere)',
            'FX 5 (brightness)',
            'FX 6 (goblins)',
            'FX 7 (echoes)',
            'FX 8 (sci-fi)',
        ),
    ),
    (
        'Ethnic',
        (
            'Sitar',
            'Banjo',
            'Shamisen',
            'Koto',
            'Kalimba',
            'Bag pipe',
            'Fiddle',
            'Shanai',
        ),
    ),
    (
        'Percussive',
        (
            'Tinkle Bell',
            'Agogo',
            'Steel Drums',
            'Woodblock',
            'Taiko Drum',
            'Melodic Tom',
            'Synth Drum',
            'Reverse Cymbal',
        ),
    ),
    (
        'Sound Effects',
        (
            'Guitar Fret Noise',
            'Breath Noise',
            'Seashore',
            'Bird Tweet',
            'Telephone Ring',
            'Helicopter',
            'Applause',
            'Gunshot',
        ),
    ),
)
