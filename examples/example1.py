## First curvilinear perspective example for vanpoint
print("example1.py -- vanpoint projection example")
print('''
In this example, we set up a two-point perspective, project a few
world points, and tessellate the edges of a box standing on the
ground so that they can be handed to any polyline renderer.''')

from vanpoint.config import PerspectiveConfig
from vanpoint.mapping import AxisMapping
from vanpoint.projector import Projector
from vanpoint.tessellate import tessellate, tessellate_polygon

# zero point and the two ground vanishing points, in screen pixels
config = PerspectiveConfig(zero=(300, 400),
                           vanishing_x=(650, 350),
                           vanishing_z=(50, 350),
                           x=AxisMapping(0.25),
                           z=AxisMapping(0.25))
proj = Projector(config)

print("horizon projection:", config.horizon_projection)
print("pixels per unit of eye-level height:", config.y_factor)

# a few points on the ground and above it
for p in [(0, 0, 0), (1, 0, 0), (0, 0, 1), (4, 0, 4), (4, 3, 4)]:
    print("world", p, "-> screen", proj.project(p))

# the footprint and the roof of a 3x2x3 box
footprint = [(1, 0, 1), (4, 0, 1), (4, 0, 4), (1, 0, 4)]
roof = [(x, 2, z) for x, _, z in footprint]

print("footprint outline:")
for q in tessellate_polygon(proj, footprint):
    print("   ", q)

print("roof outline:")
for q in tessellate_polygon(proj, roof):
    print("   ", q)

print("vertical edges:")
for a, b in zip(footprint, roof):
    print("   ", tessellate(proj, a, b))
