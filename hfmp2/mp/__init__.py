from hfmp2.mp.mp2 import MP2
