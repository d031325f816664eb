## Second curvilinear perspective example for vanpoint
print("example2.py -- vanpoint domain example")
print('''
In this example, we load a three-point perspective from YAML, find the
scene vertices that fall outside the valid domain of the rational
mapping, shift the scene to fix that, and project it in one batch.''')

from pathlib import Path

from vanpoint.config import load_config
from vanpoint.domain import out_of_domain, translate
from vanpoint.projector import Projector
from vanpoint.tessellate import ground_grid

config = load_config(Path(__file__).with_name("scene.yaml"))
proj = Projector(config)

scene = [(-6, 0, -1), (-1, 0, -1), (-1, 5, -1), (-6, 5, -1)]
print("vertices outside the domain:", out_of_domain(config, scene))

# move everything 7 units along x and 2 along z
moved = translate(scene, (7, 0, 2))
print("after translation:", out_of_domain(config, moved))

print("batch projection:")
print(proj.project_many(moved))

lines = ground_grid(proj, extent=3, spacing=1, origin=(3, 0, 3))
print("ground grid: {} polylines of {} points".format(len(lines), len(lines[0])))
