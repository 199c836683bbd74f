from hfmp2.eri.build import *
