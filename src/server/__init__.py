# -*- coding: utf-8 -*-
"""
服务端根包

文件功能：
- 汇集数据库、认证以及条目聚合等子模块。
"""
