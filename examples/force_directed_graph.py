from particle_sim import ParticleSystem
from particle_sim.renderer import ClipRegion, DebugRenderer
import numpy as np

# A small tree laid out by springs on its edges and repulsion between all nodes
edges = [(0, 1), (0, 2), (0, 3), (1, 4), (1, 5), (2, 6), (3, 7), (3, 8)]
n = 9

system = ParticleSystem(integrator="rk4", drag=0.5)
rng = np.random.default_rng(7)
nodes = [system.make_particle(position=rng.uniform(-5, 5, size=2)) for _ in range(n)]
nodes[0].make_fixed()

for i, j in edges:
    system.make_spring(nodes[i], nodes[j], strength=0.5, damping=0.2, rest_length=10.0)
for i in range(n):
    for j in range(i + 1, n):
        system.make_attraction(nodes[i], nodes[j], strength=-40.0, min_distance=2.0)

for _ in range(400):
    system.tick(0.1)

renderer = DebugRenderer(verbose=False, clip=ClipRegion(-50, -50, 100, 100))
renderer.render_system(system)

for i, j in edges:
    print(f"edge {i}-{j}: length {nodes[i].position.distance_to(nodes[j].position):.2f}")
