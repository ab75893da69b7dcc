# examples/minimal_spring.py
from particle_sim import ParticleSystem

system = ParticleSystem(integrator="rk4")

anchor = system.make_particle(position=(0.0, 0.0, 0.0), fixed=True)
bob = system.make_particle(mass=1.0, position=(15.0, 0.0, 0.0))
system.make_spring(anchor, bob, strength=0.5, damping=0.2, rest_length=10.0)

while system.time < 30.0:
    system.tick(0.1)

print("t:", system.time)
print("pos:", bob.position)
print("vel:", bob.velocity)
