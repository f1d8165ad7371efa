"""Filter stages that test, reshape, split, throttle and route messages."""