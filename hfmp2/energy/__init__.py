from hfmp2.energy.energy import *
