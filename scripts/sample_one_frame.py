from pathlib import Path
from sbsa.common.paths import default_store
from sbsa.field.config import FieldConfig
from sbsa.field.sampler import sample_range
from sbsa.field.waves import WaveParams, WaveTerm
from sbsa.io.saver import save_frame, HeaderOptions

store = default_store()       # $SBSA_STORE or /data/sbsa
label = "DEV_one_frame"

cfg = FieldConfig(
    dimensions=4,
    bounds=(16, 16, 16, 4),
    quantization_step=(1.0, 1.0, 1.0, 1.0),
    wave_params=WaveParams(terms=(
        WaveTerm(frequency=1.0, amplitude=1.0, wavenumber=0.4),
        WaveTerm(frequency=0.25, amplitude=0.5, phase=1.0, wavenumber=0.1),
    )),
)

addresses, values = sample_range(cfg.bounds, 0.0, cfg.wave_params)

# write frame 0
save_frame(store, label, 0,
           addresses=addresses, values=values,
           step=0, time=0.0, bounds=cfg.bounds,
           header_opts=HeaderOptions(write_stats=True))
print("Wrote:", (Path(store) / label / "Frame_0000").as_posix())
