# Command records, parsing and nano commands
