"""framecompose — manifest-driven photo framing.

Turn a source photograph into a framed presentation image: padded border,
optional blurred backdrop, rounded corners, a caption strip with left and
right text plus an optional logo, then re-encode at a chosen quality.
Frame layout is declared in a YAML manifest.
"""
